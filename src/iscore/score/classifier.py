"""IntervalClassifier — split a histogram into quartile groups plus outliers."""

from __future__ import annotations

import numpy as np

from iscore.core.models import GroupCounts, Histogram, ValueRange

OUTLIER_BUCKET = 4


class IntervalClassifier:
    """Assign each histogram bin to one of five buckets by its right boundary.

    Buckets are tested in order: outside the active range (bucket 4), then
    below the 25%, 50% and 75% boundaries (buckets 0, 1, 2), else bucket 3.
    All interior comparisons are strict, so a bin landing exactly on a
    boundary goes to the higher bucket of that boundary.
    """

    def bucket_indices(self, histogram: Histogram, value_range: ValueRange) -> np.ndarray:
        """Return the bucket index (0-4) of every bin."""
        b1, b2, b3 = value_range.quartile_boundaries()
        right = histogram.boundaries
        outside = (right < value_range.minimum) | (right > value_range.maximum)
        return np.select(
            [outside, right < b1, right < b2, right < b3],
            [OUTLIER_BUCKET, 0, 1, 2],
            default=3,
        )

    def classify(self, histogram: Histogram, value_range: ValueRange) -> GroupCounts:
        """Sum bin counts per bucket.

        Args:
            histogram: Histogram of one channel.
            value_range: Active value range (width > 0).

        Returns:
            GroupCounts whose total equals the histogram total.

        Raises:
            ValueError: If the value range is degenerate.
        """
        if value_range.is_degenerate:
            raise ValueError(
                f"Cannot classify against a degenerate range "
                f"[{value_range.minimum}, {value_range.maximum}]"
            )
        buckets = self.bucket_indices(histogram, value_range)
        q1, q2, q3, q4, outliers = (
            int(histogram.counts[buckets == k].sum()) for k in range(5)
        )
        return GroupCounts(q1=q1, q2=q2, q3=q3, q4=q4, outliers=outliers)
