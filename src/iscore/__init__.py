"""iScore — histogram-based intensity scoring for multi-channel microscopy images."""

__version__ = "0.1.0"
