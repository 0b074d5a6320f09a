"""BatchScorer — two-pass scoring of every image x every channel."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable, Sequence

from iscore.core.exceptions import RangeNotObservedError
from iscore.core.models import RANGE_MODES, SCORING_MODES, ValueRange
from iscore.score.calculator import ScoreCalculator
from iscore.score.classifier import IntervalClassifier
from iscore.score.histogram import HistogramBuilder, bin_count_for
from iscore.score.range_tracker import RangeTracker
from iscore.score.results import (
    EMPTY_DENOMINATOR,
    NO_DYNAMIC_RANGE,
    NO_PIXELS,
    BatchResult,
    ChannelResult,
    ImageResult,
)

if TYPE_CHECKING:
    from iscore.config import ScoringConfig
    from iscore.io.models import ChannelData, ImageSource

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
StopSignal = Callable[[], bool]


def _is_fatal(exc: Exception) -> bool:
    return isinstance(exc, (MemoryError, RangeNotObservedError))


class BatchScorer:
    """Score a batch of multi-channel images.

    Runs an optional range-discovery pass (global range mode) followed by
    the scoring pass. Each run builds a fresh RangeTracker.

    Args:
        mode: Scoring mode, "novel" (I-Score) or "classic" (IHC-Score).
        range_mode: "local", "global" or "fixed".
        fixed_ranges: (min, max) pairs for fixed mode; one pair applies to
            every channel.
    """

    def __init__(
        self,
        mode: str = "novel",
        range_mode: str = "local",
        fixed_ranges: Sequence[tuple[float, float]] | None = None,
    ) -> None:
        if mode not in SCORING_MODES:
            raise ValueError(
                f"Unknown scoring mode {mode!r}. Supported: {sorted(SCORING_MODES)}"
            )
        if range_mode not in RANGE_MODES:
            raise ValueError(
                f"Unknown range mode {range_mode!r}. Supported: {sorted(RANGE_MODES)}"
            )
        if range_mode == "fixed" and not fixed_ranges:
            raise ValueError("fixed_ranges is required when range_mode='fixed'")

        self.mode = mode
        self.range_mode = range_mode
        self.fixed_ranges = list(fixed_ranges or [])
        self._builder = HistogramBuilder()
        self._classifier = IntervalClassifier()
        self._calculator = ScoreCalculator(mode)

    @classmethod
    def from_config(cls, config: ScoringConfig) -> BatchScorer:
        return cls(
            mode=config.mode,
            range_mode=config.range_mode,
            fixed_ranges=config.fixed_ranges,
        )

    def new_tracker(self) -> RangeTracker:
        """A fresh tracker for one run, seeded with fixed ranges if any."""
        if self.range_mode == "fixed":
            return RangeTracker.from_pairs(self.fixed_ranges)
        return RangeTracker()

    def run(
        self,
        images: Sequence[ImageSource],
        progress_callback: ProgressCallback | None = None,
        should_stop: StopSignal | None = None,
    ) -> BatchResult:
        """Run both passes over ``images``.

        Args:
            images: Image sources in processing order. In global mode each
                image is read twice.
            progress_callback: Optional callback(current, total, image_name),
                called once per image per pass.
            should_stop: Optional callable polled between images.

        Returns:
            BatchResult with one ImageResult per scored image.
        """
        tracker = self.new_tracker()
        if self.range_mode == "global":
            self.discover_ranges(images, tracker, progress_callback, should_stop)
            if should_stop and should_stop():
                logger.info("Stopped during range discovery; no images scored")
                return BatchResult(
                    images=[],
                    mode=self.mode,
                    range_mode=self.range_mode,
                    ranges=tracker.ranges(),
                    warnings=["Stopped before scoring"],
                )
        return self.score_images(images, tracker, progress_callback, should_stop)

    def discover_ranges(
        self,
        images: Sequence[ImageSource],
        tracker: RangeTracker | None = None,
        progress_callback: ProgressCallback | None = None,
        should_stop: StopSignal | None = None,
    ) -> RangeTracker:
        """Range-discovery pass: widen per-channel ranges over every image.

        No histogram or score is computed. Images that cannot be read are
        logged and skipped; they are reported again by the scoring pass.

        Returns:
            The tracker holding the global ranges.
        """
        tracker = tracker if tracker is not None else RangeTracker()
        total = len(images)
        logger.info("Discovering global value ranges over %d images", total)

        for i, image in enumerate(images):
            if should_stop and should_stop():
                logger.info("Stop requested after %d of %d images", i, total)
                break
            try:
                for channel in image.channels():
                    tracker.extend(channel.index, channel.min, channel.max)
            except Exception as exc:
                if _is_fatal(exc):
                    raise
                logger.warning(
                    "Range discovery failed for %s: %s", image.name, exc, exc_info=True,
                )

            if progress_callback:
                progress_callback(i + 1, total, image.name)

        for index, value_range in enumerate(tracker.ranges()):
            logger.debug(
                "Channel %d global range [%s, %s]",
                index, value_range.minimum, value_range.maximum,
            )
        return tracker

    def score_images(
        self,
        images: Sequence[ImageSource],
        tracker: RangeTracker,
        progress_callback: ProgressCallback | None = None,
        should_stop: StopSignal | None = None,
    ) -> BatchResult:
        """Scoring pass: score every channel of every image.

        Images that cannot be read or yield no score are still listed,
        with ``error`` set or a None mean score.

        Raises:
            RangeNotObservedError: If global or fixed mode reads a channel
                index with no range.
        """
        start = time.monotonic()
        warnings: list[str] = []
        results: list[ImageResult] = []
        total = len(images)

        for i, image in enumerate(images):
            if should_stop and should_stop():
                logger.info("Stop requested after %d of %d images", i, total)
                warnings.append(f"Stopped after {i} of {total} images")
                break
            try:
                result = self.score_image(image, tracker)
            except Exception as exc:
                if _is_fatal(exc):
                    raise
                logger.warning(
                    "Scoring failed for %s: %s", image.name, exc, exc_info=True,
                )
                warnings.append(f"{image.name}: scoring failed: {exc}")
                result = ImageResult(name=image.name, error=str(exc))
            else:
                if not result.scored:
                    warnings.append(f"{image.name}: no scoreable channels")
            results.append(result)

            if progress_callback:
                progress_callback(i + 1, total, image.name)

        elapsed = time.monotonic() - start
        return BatchResult(
            images=results,
            mode=self.mode,
            range_mode=self.range_mode,
            ranges=tracker.ranges(),
            warnings=warnings,
            elapsed_seconds=round(elapsed, 3),
        )

    def score_image(self, image: ImageSource, tracker: RangeTracker) -> ImageResult:
        """Score every channel of one image."""
        channel_results = []
        for channel in image.channels():
            value_range = self._active_range(channel, tracker)
            channel_results.append(self.score_channel(channel, value_range))

        result = ImageResult(name=image.name, channels=channel_results)
        if result.scored:
            logger.info("%s: mean score %.2f", image.name, result.mean_score)
        else:
            logger.warning("%s: no channel could be scored", image.name)
        return result

    def _active_range(self, channel: ChannelData, tracker: RangeTracker) -> ValueRange | None:
        if self.range_mode == "local":
            if channel.pixel_count:
                tracker.extend(channel.index, channel.min, channel.max)
            return channel.value_range
        if not channel.pixel_count:
            return None
        return tracker.require(channel.index)

    def score_channel(
        self,
        channel: ChannelData,
        value_range: ValueRange | None,
    ) -> ChannelResult:
        """Histogram, classify and score one channel against ``value_range``."""

        def unscored(reason: str, **kwargs: object) -> ChannelResult:
            logger.debug("%s (index %d) unscored: %s", channel.label, channel.index, reason)
            return ChannelResult(
                index=channel.index,
                label=channel.label,
                bit_depth=channel.bit_depth,
                value_range=value_range,
                reason=reason,
                **kwargs,
            )

        if not channel.pixel_count or value_range is None:
            return unscored(NO_PIXELS)

        bin_count = bin_count_for(channel.bit_depth, value_range)
        if bin_count is None:
            return unscored(NO_DYNAMIC_RANGE)

        histogram = self._builder.build(channel.pixels, bin_count, value_range)
        counts = self._classifier.classify(histogram, value_range)
        score = self._calculator.score(counts)
        if score is None:
            return unscored(EMPTY_DENOMINATOR, bin_count=bin_count, counts=counts)

        return ChannelResult(
            index=channel.index,
            label=channel.label,
            bit_depth=channel.bit_depth,
            value_range=value_range,
            bin_count=bin_count,
            counts=counts,
            score=score,
        )
