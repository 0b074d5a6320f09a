"""TIFF reading, channel splitting and channel-label extraction via tifffile."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import numpy as np
import tifffile
from defusedxml import ElementTree as ET

from iscore.core.exceptions import ImageReadError
from iscore.core.models import RESERVED_LABELS
from iscore.io._sanitize import sanitize_label, unique_labels
from iscore.io.models import ChannelData, bit_depth_for_dtype, default_label

logger = logging.getLogger(__name__)

# Axes tifffile reports for a leading dimension of unknown meaning.
_UNKNOWN_AXES = ("Q", "I")


def read_tiff(path: Path) -> tuple[np.ndarray, str, list[str]]:
    """Read the first series of a TIFF file and its raw channel names.

    Args:
        path: Path to the TIFF file.

    Returns:
        Tuple of (pixel array, axes string as reported by tifffile, channel
        names from ImageJ or OME metadata, empty when there are none).

    Raises:
        ImageReadError: If the file cannot be opened or decoded.
    """
    try:
        with tifffile.TiffFile(str(path)) as tif:
            series = tif.series[0]
            return series.asarray(), series.axes, metadata_labels(tif)
    except (OSError, ValueError, IndexError, tifffile.TiffFileError) as exc:
        raise ImageReadError(str(path), str(exc)) from exc


def channel_axis(axes: str, ndim: int) -> tuple[int | None, bool]:
    """Locate the channel axis in a tifffile axes string.

    Looks for ``C`` first, then the RGB samples axis ``S``, then a leading
    axis of unknown meaning on stacks. Returns ``(None, False)`` for a
    single-channel image.

    Returns:
        Tuple of (axis index or None, True when the axis holds RGB samples).
    """
    if "C" in axes:
        return axes.index("C"), False
    if "S" in axes:
        return axes.index("S"), True
    if ndim > 2 and axes and axes[0] in _UNKNOWN_AXES:
        return 0, False
    return None, False


def split_channels(data: np.ndarray, axes: str) -> tuple[list[np.ndarray], bool]:
    """Split an image array into per-channel planes (or stacks)."""
    axis, rgb = channel_axis(axes, data.ndim)
    if axis is None:
        return [data], False
    return [np.take(data, i, axis=axis) for i in range(data.shape[axis])], rgb


def metadata_labels(tif: tifffile.TiffFile) -> list[str]:
    """Raw channel names from ImageJ ``Labels``, else OME ``Channel@Name``."""
    if tif.imagej_metadata:
        labels = tif.imagej_metadata.get("Labels")
        if isinstance(labels, (list, tuple)):
            return [str(label) for label in labels]
    if tif.ome_metadata:
        return ome_channel_names(tif.ome_metadata)
    return []


def resolve_labels(raw: list[str], n_channels: int) -> list[str]:
    """Channel labels from metadata names, falling back to ``Ch<n>``.

    Returns:
        Exactly ``n_channels`` sanitized labels, distinct from each other
        and from the summary column names.
    """
    labels = []
    for i in range(n_channels):
        fallback = default_label(i)
        labels.append(sanitize_label(raw[i], fallback) if i < len(raw) else fallback)
    return unique_labels(labels, reserved=RESERVED_LABELS)


def ome_channel_names(xml: str) -> list[str]:
    """Channel ``Name`` attributes of the first OME image, in order.

    Malformed or hostile XML yields an empty list.
    """
    try:
        root = ET.fromstring(xml)
    except (ET.ParseError, ValueError) as exc:
        logger.debug("Ignoring unparsable OME-XML: %s", exc)
        return []
    pixels = root.find(".//{*}Pixels")
    if pixels is None:
        return []
    return [ch.get("Name", "") for ch in pixels.findall("{*}Channel")]


class TiffImage:
    """An image source backed by a TIFF file.

    Pixels are read on every call to ``channels()`` so that only one image
    is held in memory at a time during a batch.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    def channels(self) -> Iterator[ChannelData]:
        data, axes, raw_labels = read_tiff(self.path)
        planes, rgb = split_channels(data, axes)
        labels = resolve_labels(raw_labels, len(planes))
        logger.debug(
            "%s: axes=%s dtype=%s channels=%d", self.name, axes, data.dtype, len(planes),
        )
        bit_depth = bit_depth_for_dtype(data.dtype, rgb=rgb)
        for i, plane in enumerate(planes):
            yield ChannelData(index=i, bit_depth=bit_depth, label=labels[i], pixels=plane)

    def __repr__(self) -> str:
        return f"TiffImage({str(self.path)!r})"
