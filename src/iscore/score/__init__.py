"""iScore Score — histogram-based per-channel scoring engine."""

from iscore.score.batch import BatchScorer
from iscore.score.calculator import ScoreCalculator
from iscore.score.classifier import IntervalClassifier
from iscore.score.histogram import HistogramBuilder, bin_count_for
from iscore.score.range_tracker import RangeTracker
from iscore.score.results import BatchResult, ChannelResult, ImageResult

__all__ = [
    "BatchResult",
    "BatchScorer",
    "ChannelResult",
    "HistogramBuilder",
    "ImageResult",
    "IntervalClassifier",
    "RangeTracker",
    "ScoreCalculator",
    "bin_count_for",
]
