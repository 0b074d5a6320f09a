"""Shared fixtures for CLI module tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def batch_dir(tmp_path: Path, quartile_pixels: np.ndarray) -> Path:
    """A directory of 2-channel 8-bit ImageJ TIFFs labelled DAPI / GFP.

    Layout:
        - sample_1.tif: DAPI has the 10/20/30/40 quartile pattern, GFP is constant.
        - sample_2.tif: both channels constant (unscoreable).
    """
    d = tmp_path / "batch"
    d.mkdir()
    metadata = {"axes": "CYX", "Labels": ["DAPI", "GFP"]}
    sample_1 = np.stack([quartile_pixels, np.full_like(quartile_pixels, 7)])
    tifffile.imwrite(str(d / "sample_1.tif"), sample_1, imagej=True, metadata=metadata)
    sample_2 = np.full((2, 10, 10), 3, dtype=np.uint8)
    tifffile.imwrite(str(d / "sample_2.tif"), sample_2, imagej=True, metadata=metadata)
    return d
