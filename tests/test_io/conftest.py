"""Shared fixtures for IO module tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile


@pytest.fixture
def imagej_tiff(tmp_path: Path, quartile_pixels: np.ndarray) -> Path:
    """A 2-channel 8-bit ImageJ hyperstack with channel labels."""
    data = np.stack([quartile_pixels, np.full_like(quartile_pixels, 7)])
    p = tmp_path / "labelled.tif"
    tifffile.imwrite(
        str(p), data, imagej=True,
        metadata={"axes": "CYX", "Labels": ["DAPI", "Alexa 488"]},
    )
    return p


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """A directory with mixed files.

    Layout: a.tif, b.tif, c.tiff, notes.txt, .hidden.tif
    """
    d = tmp_path / "images"
    d.mkdir()
    for name in ("a.tif", "b.tif", "c.tiff", ".hidden.tif"):
        tifffile.imwrite(str(d / name), np.zeros((8, 8), dtype=np.uint16))
    (d / "notes.txt").write_text("not an image")
    return d
