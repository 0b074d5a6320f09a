"""iScore IO — image sources, TIFF reading and batch file scanning."""

from __future__ import annotations

from pathlib import Path

from iscore.io.models import (
    ArrayImage,
    ChannelData,
    ImageSource,
    ScanResult,
    bit_depth_for_dtype,
)
from iscore.io.scanner import FileScanner
from iscore.io.tiff import TiffImage

__all__ = [
    "ArrayImage",
    "ChannelData",
    "FileScanner",
    "ImageSource",
    "ScanResult",
    "TiffImage",
    "bit_depth_for_dtype",
    "open_images",
]


def open_images(
    path: Path,
    extension: str | None = None,
    batch: bool = True,
) -> list[TiffImage]:
    """Scan ``path`` and wrap every file as a TiffImage. Convenience wrapper.

    Args:
        path: A selected image file, or a directory.
        extension: Optional extension filter.
        batch: Include the selected file's siblings.

    Returns:
        Image sources in processing order.
    """
    result = FileScanner().scan(path, extension=extension, batch=batch)
    return [TiffImage(p) for p in result.files]
