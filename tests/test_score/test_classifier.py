"""Tests for IntervalClassifier — quartile groups plus outliers."""

from __future__ import annotations

import numpy as np
import pytest

from iscore.core.models import GroupCounts, Histogram, ValueRange
from iscore.score.classifier import IntervalClassifier
from iscore.score.histogram import HistogramBuilder


@pytest.fixture
def classifier() -> IntervalClassifier:
    return IntervalClassifier()


class TestBucketAssignment:
    def test_bins_by_right_boundary(self, classifier):
        """Boundaries 25/50/75 over [0, 100]; exact hits go to the upper bucket."""
        hist = Histogram(
            boundaries=np.array([-5.0, 10.0, 25.0, 30.0, 50.0, 60.0, 75.0, 100.0, 120.0]),
            counts=np.array([1, 2, 3, 4, 5, 6, 7, 8, 9]),
        )
        counts = classifier.classify(hist, ValueRange(0.0, 100.0))
        assert counts == GroupCounts(q1=2, q2=7, q3=11, q4=15, outliers=10)

    def test_bucket_indices(self, classifier):
        hist = Histogram(
            boundaries=np.array([-1.0, 0.0, 24.9, 25.0, 49.9, 50.0, 74.9, 75.0, 100.0, 100.1]),
            counts=np.ones(10, dtype=np.int64),
        )
        buckets = classifier.bucket_indices(hist, ValueRange(0.0, 100.0))
        assert buckets.tolist() == [4, 0, 0, 1, 1, 2, 2, 3, 3, 4]

    def test_range_minimum_is_inside(self, classifier):
        hist = Histogram(np.array([10.0]), np.array([5]))
        counts = classifier.classify(hist, ValueRange(10.0, 20.0))
        assert counts == GroupCounts(5, 0, 0, 0, 0)

    def test_degenerate_range_raises(self, classifier):
        hist = Histogram(np.array([1.0]), np.array([1]))
        with pytest.raises(ValueError, match="degenerate"):
            classifier.classify(hist, ValueRange(1.0, 1.0))


class TestWithBuiltHistograms:
    def test_quartile_scenario(self, classifier, quartile_pixels):
        value_range = ValueRange(0.0, 100.0)
        hist = HistogramBuilder().build(quartile_pixels, 256, value_range)
        counts = classifier.classify(hist, value_range)
        assert counts == GroupCounts(q1=10, q2=20, q3=30, q4=40, outliers=0)

    def test_narrow_fixed_range_produces_outliers(self, classifier, quartile_pixels):
        value_range = ValueRange(0.0, 50.0)
        hist = HistogramBuilder().build(quartile_pixels, 256, value_range)
        counts = classifier.classify(hist, value_range)
        assert counts == GroupCounts(q1=10, q2=0, q3=0, q4=20, outliers=70)

    @pytest.mark.parametrize("seed", [0, 1, 2])
    @pytest.mark.parametrize("bounds", [None, (100.0, 900.0)])
    def test_sum_invariant(self, classifier, seed, bounds):
        rng = np.random.default_rng(seed)
        pixels = rng.integers(0, 1000, size=(32, 32)).astype(np.uint16)
        if bounds is None:
            value_range = ValueRange(float(pixels.min()), float(pixels.max()))
        else:
            value_range = ValueRange(*bounds)
        hist = HistogramBuilder().build(pixels, 65534, value_range)
        counts = classifier.classify(hist, value_range)
        assert counts.total == pixels.size
