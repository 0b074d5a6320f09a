"""ScoreCalculator — weighted scores from quartile group counts."""

from __future__ import annotations

from iscore.core.models import SCORING_MODES, GroupCounts


def _check_mode(mode: str) -> None:
    if mode not in SCORING_MODES:
        raise ValueError(
            f"Unknown scoring mode {mode!r}. Supported: {sorted(SCORING_MODES)}"
        )


def denominator(counts: GroupCounts, mode: str = "novel") -> int:
    """Pixel count of the three groups that take part in ``mode``.

    Novel mode uses q2..q4; classic mode uses q1..q3. Outliers never count.
    """
    _check_mode(mode)
    if mode == "novel":
        return counts.q2 + counts.q3 + counts.q4
    return counts.q1 + counts.q2 + counts.q3


class ScoreCalculator:
    """Convert group counts into a single I-Score or IHC-Score.

    * novel (I-Score): ``100 * (3*q4 + 2*q3 + q2) / (q2 + q3 + q4)``
    * classic (IHC-Score): ``100 * (3*q1 + 2*q2 + q3) / (q1 + q2 + q3)``

    Defined scores therefore lie in [100, 300].
    """

    def __init__(self, mode: str = "novel") -> None:
        _check_mode(mode)
        self.mode = mode

    def score(self, counts: GroupCounts, mode: str | None = None) -> float | None:
        """Score one channel's group counts.

        Args:
            counts: Group counts from the interval classifier.
            mode: Override the calculator's mode for this call.

        Returns:
            The score, or None when the mode's denominator is zero.
        """
        mode = mode or self.mode
        denom = denominator(counts, mode)
        if denom == 0:
            return None
        if mode == "novel":
            numerator = 3 * counts.q4 + 2 * counts.q3 + counts.q2
        else:
            numerator = 3 * counts.q1 + 2 * counts.q2 + counts.q3
        return 100.0 * numerator / denom
