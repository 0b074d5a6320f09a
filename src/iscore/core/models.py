"""Data models for the iScore core module."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

SCORING_MODES = frozenset({"novel", "classic"})
RANGE_MODES = frozenset({"local", "global", "fixed"})
BIT_DEPTHS = frozenset({8, 16, 24, 32})

# Group names indexed q1..q4 (lowest to highest intensity quarter).
GROUP_NAMES: dict[str, tuple[str, str, str, str]] = {
    "novel": ("Negative", "Low", "Medium", "High"),
    "classic": ("High Positive", "Positive", "Low Positive", "Negative"),
}
OUTLIER_NAME = "Outlier"

# Fixed summary-table columns; channel labels may not take these names.
IMAGE_COLUMN = "Image"
MEAN_COLUMN = "Mean"
RESERVED_LABELS = frozenset({IMAGE_COLUMN, MEAN_COLUMN})


@dataclass(frozen=True)
class ValueRange:
    """A (minimum, maximum) intensity pair for one channel index.

    An unset range holds ``(+inf, -inf)`` so that any real observation
    widens both ends.
    """

    minimum: float
    maximum: float

    @classmethod
    def unset(cls) -> ValueRange:
        """Return the sentinel range that any sample will widen."""
        return cls(math.inf, -math.inf)

    @property
    def is_set(self) -> bool:
        """True once at least one sample has been observed."""
        return self.minimum <= self.maximum

    @property
    def width(self) -> float:
        """Range width ``maximum - minimum`` (negative when unset)."""
        return self.maximum - self.minimum

    @property
    def is_degenerate(self) -> bool:
        """True when the range cannot be scored (width <= 0 or undefined)."""
        return not self.width > 0

    def widen(self, minimum: float, maximum: float) -> ValueRange:
        """Return a range covering both this range and the observation."""
        return ValueRange(min(self.minimum, minimum), max(self.maximum, maximum))

    def quartile_boundaries(self) -> tuple[float, float, float]:
        """Interior boundaries at 25%, 50% and 75% of the range width."""
        delta = self.width
        return (
            self.minimum + 0.25 * delta,
            self.minimum + 0.50 * delta,
            self.minimum + 0.75 * delta,
        )


@dataclass(frozen=True)
class Histogram:
    """Binned pixel intensities.

    Attributes:
        boundaries: Right boundary of each bin, strictly increasing.
        counts: Pixel count of each bin (same length as boundaries).
    """

    boundaries: np.ndarray
    counts: np.ndarray

    def __post_init__(self) -> None:
        """Validate that boundaries and counts describe the same bins."""
        if self.boundaries.shape != self.counts.shape:
            raise ValueError(
                f"boundaries and counts must have the same shape, got "
                f"{self.boundaries.shape} and {self.counts.shape}"
            )

    @property
    def bin_count(self) -> int:
        return int(self.counts.size)

    @property
    def total(self) -> int:
        """Total number of pixels across all bins."""
        return int(self.counts.sum())


@dataclass(frozen=True)
class GroupCounts:
    """Pixel counts of the four quartile groups plus the outlier bucket.

    ``q1`` holds the lowest-intensity quarter of the active range and ``q4``
    the highest. ``outliers`` holds pixels outside the active range.
    """

    q1: int
    q2: int
    q3: int
    q4: int
    outliers: int = 0

    def __post_init__(self) -> None:
        """Validate that all counts are non-negative."""
        for name, value in zip(("q1", "q2", "q3", "q4", "outliers"), self.as_tuple()):
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        return (self.q1, self.q2, self.q3, self.q4, self.outliers)

    def __getitem__(self, index: int) -> int:
        return self.as_tuple()[index]

    @property
    def total(self) -> int:
        """Sum of all five buckets."""
        return sum(self.as_tuple())

    def fractions(self) -> tuple[float, float, float, float, float]:
        """Fraction of the total pixel count held by each bucket.

        Returns all zeros when the total is zero.
        """
        total = self.total
        if total == 0:
            return (0.0, 0.0, 0.0, 0.0, 0.0)
        return tuple(v / total for v in self.as_tuple())  # type: ignore[return-value]
