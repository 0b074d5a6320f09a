"""Shared test fixtures for iScore."""

import numpy as np
import pytest


@pytest.fixture
def quartile_pixels() -> np.ndarray:
    """100 8-bit pixels spanning 0..100 that split 10/20/30/40 into the quartiles.

    With 256 bins over [0, 100] each value lands in a bin whose right
    boundary falls in a distinct quarter: 0 -> q1, 40 -> q2, 60 -> q3,
    100 -> q4.
    """
    values = [0] * 10 + [40] * 20 + [60] * 30 + [100] * 40
    return np.array(values, dtype=np.uint8).reshape(10, 10)
