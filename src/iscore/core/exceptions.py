"""Exception classes for the iScore core module."""


class ScoringError(Exception):
    """Base exception for all scoring-related errors."""


class RangeNotObservedError(ScoringError):
    """Raised when reading the value range of a channel that was never observed.

    In global and fixed range modes every channel index must have a range
    before the scoring pass reads it. Falling back to a default range would
    silently misclassify every pixel of the channel.
    """

    def __init__(self, channel_index: int | None = None) -> None:
        if channel_index is not None:
            msg = f"No value range observed for channel index {channel_index}"
        else:
            msg = "No value range observed"
        super().__init__(msg)
        self.channel_index = channel_index


class UnsupportedPixelTypeError(ScoringError):
    """Raised when pixel data maps to no supported bit-depth class."""

    def __init__(self, dtype: str | None = None) -> None:
        msg = f"Unsupported pixel type: {dtype}" if dtype else "Unsupported pixel type"
        super().__init__(msg)
        self.dtype = dtype


class ImageReadError(ScoringError):
    """Raised when an image file cannot be opened or decoded."""

    def __init__(self, path: str | None = None, reason: str | None = None) -> None:
        if path and reason:
            msg = f"Could not read image {path}: {reason}"
        elif path:
            msg = f"Could not read image {path}"
        else:
            msg = "Could not read image"
        super().__init__(msg)
        self.path = path
        self.reason = reason


class ConfigError(ScoringError):
    """Raised when a scoring configuration is invalid."""
