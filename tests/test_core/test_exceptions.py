"""Tests for iscore.core.exceptions."""

import pytest

from iscore.core.exceptions import (
    ConfigError,
    ImageReadError,
    RangeNotObservedError,
    ScoringError,
    UnsupportedPixelTypeError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_scoring_error(self):
        for exc_cls in (RangeNotObservedError, UnsupportedPixelTypeError,
                        ImageReadError, ConfigError):
            assert issubclass(exc_cls, ScoringError)

    def test_catch_all_with_base(self):
        with pytest.raises(ScoringError):
            raise RangeNotObservedError(2)

    def test_range_not_observed_message(self):
        exc = RangeNotObservedError(3)
        assert "3" in str(exc)
        assert exc.channel_index == 3

    def test_range_not_observed_no_index(self):
        exc = RangeNotObservedError()
        assert str(exc) == "No value range observed"
        assert exc.channel_index is None

    def test_unsupported_pixel_type_message(self):
        exc = UnsupportedPixelTypeError("int64")
        assert "int64" in str(exc)
        assert exc.dtype == "int64"

    def test_image_read_error_message(self):
        exc = ImageReadError("/data/a.tif", "not a TIFF file")
        assert "/data/a.tif" in str(exc)
        assert "not a TIFF file" in str(exc)
        assert exc.path == "/data/a.tif"
        assert exc.reason == "not a TIFF file"

    def test_image_read_error_path_only(self):
        exc = ImageReadError("/data/a.tif")
        assert str(exc) == "Could not read image /data/a.tif"
