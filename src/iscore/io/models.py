"""Data models for the IO module."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Protocol, Sequence

import numpy as np

from iscore.core.exceptions import UnsupportedPixelTypeError
from iscore.core.models import BIT_DEPTHS, RESERVED_LABELS, ValueRange
from iscore.io._sanitize import unique_labels


def bit_depth_for_dtype(dtype: np.dtype | str, rgb: bool = False) -> int:
    """Map a numpy dtype to its bit-depth class.

    Signed and unsigned integers of the same width share a class. Wider
    integers are rejected: the float bin-width rule would need one bin per
    0.001 of their range.

    Args:
        dtype: Pixel dtype.
        rgb: True when the plane is one component of an RGB image.

    Returns:
        8, 16, 24 or 32 (float).

    Raises:
        UnsupportedPixelTypeError: For any other pixel type.
    """
    dtype = np.dtype(dtype)
    if dtype in (np.uint8, np.int8):
        return 24 if rgb else 8
    if dtype in (np.uint16, np.int16):
        return 16
    if np.issubdtype(dtype, np.floating):
        return 32
    raise UnsupportedPixelTypeError(str(dtype))


@dataclass(frozen=True)
class ChannelData:
    """One scalar-intensity plane of a multi-channel image.

    ``pixels`` is flattened and, for float data, stripped of NaN and
    infinite values on construction.
    """

    index: int
    bit_depth: int
    label: str
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        """Validate index and bit depth, normalize the pixel buffer."""
        if self.index < 0:
            raise ValueError(f"index must be >= 0, got {self.index}")
        if self.bit_depth not in BIT_DEPTHS:
            raise ValueError(
                f"Invalid bit depth {self.bit_depth!r}. Must be one of {sorted(BIT_DEPTHS)}"
            )
        values = np.asarray(self.pixels).ravel()
        if np.issubdtype(values.dtype, np.floating):
            values = values[np.isfinite(values)]
        object.__setattr__(self, "pixels", values)

    @property
    def pixel_count(self) -> int:
        return int(self.pixels.size)

    @property
    def min(self) -> float:
        """Minimum intensity, NaN for an empty channel."""
        return float(self.pixels.min()) if self.pixels.size else math.nan

    @property
    def max(self) -> float:
        """Maximum intensity, NaN for an empty channel."""
        return float(self.pixels.max()) if self.pixels.size else math.nan

    @property
    def value_range(self) -> ValueRange | None:
        """The channel's own (min, max), or None when it has no pixels."""
        if not self.pixels.size:
            return None
        return ValueRange(self.min, self.max)


class ImageSource(Protocol):
    """Anything that yields the channels of one image."""

    @property
    def name(self) -> str:
        """File identity used in results."""

    def channels(self) -> Iterator[ChannelData]:
        """Yield the image's channels in index order."""


class ArrayImage:
    """In-memory image with the channel axis first.

    Args:
        name: Identity reported in results.
        data: Array of shape (C, ...) or a single 2D plane.
        labels: Optional channel labels; defaults to ``Ch1``, ``Ch2``, ...
            Repeated labels and the summary column names get a numeric
            suffix.
        bit_depth: Override the bit-depth class derived from the dtype.
    """

    def __init__(
        self,
        name: str,
        data: np.ndarray | Sequence[np.ndarray],
        labels: Sequence[str] | None = None,
        bit_depth: int | None = None,
    ) -> None:
        if isinstance(data, np.ndarray) and data.ndim <= 2:
            data = data[np.newaxis, ...]
        self._planes = [np.asarray(p) for p in data]
        if labels is not None and len(labels) != len(self._planes):
            raise ValueError(
                f"Got {len(labels)} labels for {len(self._planes)} channels"
            )
        if labels is None:
            labels = [default_label(i) for i in range(len(self._planes))]
        self._labels = unique_labels(labels, reserved=RESERVED_LABELS)
        self._bit_depth = bit_depth
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def channels(self) -> Iterator[ChannelData]:
        for i, plane in enumerate(self._planes):
            yield ChannelData(
                index=i,
                bit_depth=self._bit_depth or bit_depth_for_dtype(plane.dtype),
                label=self._labels[i],
                pixels=plane,
            )

    def __repr__(self) -> str:
        return f"ArrayImage({self._name!r}, channels={len(self._planes)})"


def default_label(index: int) -> str:
    """Fallback channel label, 1-based."""
    return f"Ch{index + 1}"


@dataclass(frozen=True)
class ScanResult:
    """Files selected for a scoring run, in processing order."""

    source_path: Path
    files: list[Path]
    extension: str
    warnings: list[str] = field(default_factory=list)

