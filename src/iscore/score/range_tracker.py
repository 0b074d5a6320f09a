"""RangeTracker — per-channel running minimum/maximum across a batch."""

from __future__ import annotations

import math

from iscore.core.exceptions import RangeNotObservedError
from iscore.core.models import ValueRange


class RangeTracker:
    """Owns the per-channel-index value ranges for one batch run.

    Storage grows lazily: the first reference to an index beyond the
    current length pads the array with unset ``(+inf, -inf)`` ranges, so
    images may carry different channel counts.

    Args:
        fixed: Optional user-supplied ranges. A single range applies to
            every channel index; otherwise ranges are matched by index.
            A tracker built with fixed ranges rejects ``extend()``.
    """

    def __init__(self, fixed: list[ValueRange] | None = None) -> None:
        self._ranges: list[ValueRange] = list(fixed) if fixed else []
        self._broadcast = fixed is not None and len(fixed) == 1
        self._frozen = bool(fixed)

    @classmethod
    def from_pairs(cls, pairs: list[tuple[float, float]]) -> RangeTracker:
        """Build a fixed tracker from (min, max) pairs."""
        return cls(fixed=[ValueRange(float(lo), float(hi)) for lo, hi in pairs])

    @property
    def is_fixed(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._ranges)

    def _ensure(self, channel_index: int) -> None:
        if channel_index < 0:
            raise IndexError(f"channel_index must be >= 0, got {channel_index}")
        missing = channel_index + 1 - len(self._ranges)
        if missing > 0:
            self._ranges.extend(ValueRange.unset() for _ in range(missing))

    def extend(self, channel_index: int, observed_min: float, observed_max: float) -> ValueRange:
        """Widen the stored range of a channel to cover an observation.

        NaN observations (channels without any pixel) leave the range
        untouched.

        Returns:
            The updated range for ``channel_index``.

        Raises:
            RuntimeError: If the tracker holds fixed ranges.
        """
        if self._frozen:
            raise RuntimeError("Fixed value ranges cannot be extended")
        self._ensure(channel_index)
        current = self._ranges[channel_index]
        if math.isnan(observed_min) or math.isnan(observed_max):
            return current
        updated = current.widen(float(observed_min), float(observed_max))
        self._ranges[channel_index] = updated
        return updated

    def get(self, channel_index: int) -> ValueRange:
        """Return the stored range, or the unset sentinel if never observed."""
        if self._broadcast:
            return self._ranges[0]
        if channel_index < 0:
            raise IndexError(f"channel_index must be >= 0, got {channel_index}")
        if channel_index >= len(self._ranges):
            return ValueRange.unset()
        return self._ranges[channel_index]

    def require(self, channel_index: int) -> ValueRange:
        """Return the stored range, failing loudly if it was never observed.

        Raises:
            RangeNotObservedError: If no observation covers the index.
        """
        value_range = self.get(channel_index)
        if not value_range.is_set:
            raise RangeNotObservedError(channel_index)
        return value_range

    def ranges(self) -> list[ValueRange]:
        """Snapshot of every stored range in channel-index order."""
        return list(self._ranges)
