"""iScore Core — value ranges, histograms, group counts, exceptions."""

from iscore.core.exceptions import (
    ConfigError,
    ImageReadError,
    RangeNotObservedError,
    ScoringError,
    UnsupportedPixelTypeError,
)
from iscore.core.models import (
    BIT_DEPTHS,
    GROUP_NAMES,
    OUTLIER_NAME,
    RANGE_MODES,
    SCORING_MODES,
    GroupCounts,
    Histogram,
    ValueRange,
)

__all__ = [
    "BIT_DEPTHS",
    "GROUP_NAMES",
    "OUTLIER_NAME",
    "RANGE_MODES",
    "SCORING_MODES",
    "ConfigError",
    "GroupCounts",
    "Histogram",
    "ImageReadError",
    "RangeNotObservedError",
    "ScoringError",
    "UnsupportedPixelTypeError",
    "ValueRange",
]
