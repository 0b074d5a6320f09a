"""HistogramBuilder — bit-depth dependent binning of channel intensities."""

from __future__ import annotations

import math

import numpy as np

from iscore.core.models import BIT_DEPTHS, Histogram, ValueRange

FLOAT_BIN_WIDTH = 0.001
MIN_FLOAT_BINS = 1024
# 16-bit channels use two bins fewer than the full 65536 levels.
BINS_16BIT = 65534
BINS_8BIT = 256


def bin_count_for(bit_depth: int, value_range: ValueRange) -> int | None:
    """Number of histogram bins for a channel.

    Args:
        bit_depth: Bit-depth class (8, 16, 24 or 32 for float).
        value_range: Active value range of the channel.

    Returns:
        The bin count, or None when the range is degenerate and the
        channel must not be scored.

    Raises:
        ValueError: If bit_depth is not a supported class.
    """
    if bit_depth not in BIT_DEPTHS:
        raise ValueError(
            f"Unsupported bit depth {bit_depth!r}. Must be one of {sorted(BIT_DEPTHS)}"
        )
    if value_range.is_degenerate:
        return None

    if bit_depth == 32:
        # Round half up, force even, clamp to the minimum.
        n_bins = int(math.floor(value_range.width / FLOAT_BIN_WIDTH + 0.5))
        if n_bins % 2 == 1:
            n_bins += 1
        return max(n_bins, MIN_FLOAT_BINS)
    if bit_depth == 16:
        return BINS_16BIT
    return BINS_8BIT


class HistogramBuilder:
    """Bin a channel's pixels into equal-width bins.

    The bins span the union of the pixels' own extent and the active value
    range, so pixels outside the active range still fall in a bin and the
    bin counts always sum to the channel's pixel count.
    """

    def build(
        self,
        pixels: np.ndarray,
        bin_count: int,
        value_range: ValueRange,
    ) -> Histogram:
        """Build a histogram of ``pixels``.

        Args:
            pixels: Pixel intensities (any shape, NaN-free).
            bin_count: Number of bins, must be > 0.
            value_range: Active value range of the channel.

        Returns:
            Histogram with right bin boundaries and per-bin pixel counts.

        Raises:
            ValueError: If bin_count <= 0 or the span is empty.
        """
        if bin_count <= 0:
            raise ValueError(f"bin_count must be > 0, got {bin_count}")

        values = np.asarray(pixels).ravel()
        low, high = value_range.minimum, value_range.maximum
        if values.size:
            low = min(low, float(values.min()))
            high = max(high, float(values.max()))
        if not high > low:
            raise ValueError(f"Cannot bin an empty span [{low}, {high}]")

        counts, edges = np.histogram(values, bins=bin_count, range=(low, high))
        return Histogram(boundaries=edges[1:], counts=counts.astype(np.int64))
