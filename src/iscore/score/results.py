"""Per-channel, per-image and per-batch scoring results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from iscore.core.models import (
    GROUP_NAMES,
    IMAGE_COLUMN,
    MEAN_COLUMN,
    OUTLIER_NAME,
    GroupCounts,
    ValueRange,
)

# Reasons a channel carries no score.
NO_DYNAMIC_RANGE = "no dynamic range"
EMPTY_DENOMINATOR = "empty denominator"
NO_PIXELS = "no pixels"

UNSCORED = "unscored"


@dataclass(frozen=True)
class ChannelResult:
    """Outcome of scoring one channel.

    Attributes:
        index: Channel index within the image.
        label: Channel label (result-table column key).
        bit_depth: Bit-depth class of the channel.
        value_range: Active value range used for classification.
        bin_count: Histogram bin count, None if no histogram was built.
        counts: Group counts, None if the channel was not classified.
        score: The score, None when the channel is unscored.
        reason: Why the channel is unscored, None when scored.
    """

    index: int
    label: str
    bit_depth: int
    value_range: ValueRange | None
    bin_count: int | None = None
    counts: GroupCounts | None = None
    score: float | None = None
    reason: str | None = None

    @property
    def scored(self) -> bool:
        return self.score is not None


@dataclass(frozen=True)
class ImageResult:
    """Scores of every channel of one image.

    Attributes:
        name: File identity of the image.
        channels: Channel results in index order.
        error: Set when the image could not be read at all.
    """

    name: str
    channels: list[ChannelResult] = field(default_factory=list)
    error: str | None = None

    @property
    def scores(self) -> dict[str, float | None]:
        """Ordered mapping of channel label to score (None = unscored)."""
        return {ch.label: ch.score for ch in self.channels}

    @property
    def mean_score(self) -> float | None:
        """Mean over scored channels; None when no channel was scored."""
        values = [ch.score for ch in self.channels if ch.score is not None]
        if not values:
            return None
        return float(np.mean(values))

    @property
    def scored(self) -> bool:
        return self.mean_score is not None


@dataclass(frozen=True)
class BatchResult:
    """Result of a batch scoring run.

    Attributes:
        images: One ImageResult per input image, in input order.
        mode: Scoring mode used ("novel" or "classic").
        range_mode: Range mode used ("local", "global" or "fixed").
        ranges: Per-channel-index ranges held by the tracker at the end.
        warnings: Warning messages collected during the run.
        elapsed_seconds: Wall-clock time in seconds.
    """

    images: list[ImageResult]
    mode: str
    range_mode: str
    ranges: list[ValueRange] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def images_scored(self) -> int:
        return sum(1 for img in self.images if img.scored)

    def channel_labels(self) -> list[str]:
        """Distinct channel labels in first-seen order."""
        labels: list[str] = []
        for img in self.images:
            for ch in img.channels:
                if ch.label not in labels:
                    labels.append(ch.label)
        return labels

    def to_dataframe(self) -> pd.DataFrame:
        """Summary table: one row per image, one column per channel label.

        Unscored values are NaN. Every image is present, including those
        that could not be read or scored.
        """
        labels = self.channel_labels()
        rows = []
        for img in self.images:
            row: dict[str, object] = {IMAGE_COLUMN: img.name}
            scores = img.scores
            for label in labels:
                value = scores.get(label)
                row[label] = np.nan if value is None else value
            mean = img.mean_score
            row[MEAN_COLUMN] = np.nan if mean is None else mean
            rows.append(row)
        return pd.DataFrame(rows, columns=[IMAGE_COLUMN, *labels, MEAN_COLUMN])

    def classification_report(self) -> pd.DataFrame:
        """Long-form table of pixels and percent per group, per channel."""
        names = [*GROUP_NAMES[self.mode], OUTLIER_NAME]
        rows = []
        for img in self.images:
            for ch in img.channels:
                if ch.counts is None:
                    continue
                for name, pixels, fraction in zip(
                    names, ch.counts.as_tuple(), ch.counts.fractions(),
                ):
                    rows.append({
                        IMAGE_COLUMN: img.name,
                        "Channel": ch.label,
                        "Group": name,
                        "Pixels": pixels,
                        "Percent": round(100.0 * fraction, 4),
                    })
        return pd.DataFrame(rows, columns=[IMAGE_COLUMN, "Channel", "Group", "Pixels", "Percent"])

    def to_csv(self, path: Path) -> None:
        """Write the summary table to CSV, marking unscored cells."""
        self.to_dataframe().to_csv(path, index=False, na_rep=UNSCORED)
