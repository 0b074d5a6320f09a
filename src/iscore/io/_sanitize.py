"""Channel label sanitization for result-table column keys."""

from __future__ import annotations

import re
from typing import Iterable

_INVALID_CHARS_RE = re.compile(r"[^A-Za-z0-9._+-]")
_MAX_LABEL_LENGTH = 64


def sanitize_label(value: str, fallback: str) -> str:
    """Clean a channel label read from image metadata.

    Whitespace runs become single underscores, characters outside
    ``[A-Za-z0-9._+-]`` are dropped and the result is truncated.

    Args:
        value: Raw label.
        fallback: Label to use if nothing survives cleaning.

    Returns:
        A non-empty label.
    """
    result = "_".join(value.split())
    result = _INVALID_CHARS_RE.sub("", result)
    result = result.strip("._-")
    if not result:
        return fallback
    return result[:_MAX_LABEL_LENGTH]


def unique_labels(labels: Iterable[str], reserved: Iterable[str] = ()) -> list[str]:
    """Suffix repeated labels with ``_2``, ``_3``... so each is a distinct key.

    Names in ``reserved`` are treated as already taken.
    """
    taken = set(reserved)
    result = []
    for label in labels:
        candidate = label
        n = 1
        while candidate in taken:
            n += 1
            candidate = f"{label}_{n}"
        taken.add(candidate)
        result.append(candidate)
    return result
