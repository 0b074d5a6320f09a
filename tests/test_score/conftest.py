"""Shared fixtures for scoring tests."""

from __future__ import annotations

from typing import Iterator

import numpy as np
import pytest

from iscore.core.exceptions import ImageReadError
from iscore.io.models import ArrayImage, ChannelData


class FailingImage:
    """Image source whose pixels cannot be read."""

    def __init__(self, name: str) -> None:
        self.name = name

    def channels(self) -> Iterator[ChannelData]:
        raise ImageReadError(self.name, "truncated file")


class GrowingImage:
    """Image source that reports one more channel on every read."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.reads = 0

    def channels(self) -> Iterator[ChannelData]:
        self.reads += 1
        for i in range(self.reads):
            pixels = np.arange(100, dtype=np.uint8) + i
            yield ChannelData(index=i, bit_depth=8, label=f"Ch{i + 1}", pixels=pixels)


@pytest.fixture
def two_channel_image(quartile_pixels: np.ndarray) -> ArrayImage:
    """DAPI carries the 10/20/30/40 quartile pattern, GFP is constant."""
    gfp = np.full_like(quartile_pixels, 7)
    return ArrayImage("sample_1.tif", np.stack([quartile_pixels, gfp]), labels=["DAPI", "GFP"])


@pytest.fixture
def constant_image() -> ArrayImage:
    """Every channel is constant, so nothing can be scored."""
    data = np.stack([np.full((8, 8), 3, dtype=np.uint8), np.full((8, 8), 9, dtype=np.uint8)])
    return ArrayImage("flat.tif", data, labels=["DAPI", "GFP"])
