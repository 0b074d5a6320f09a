"""ScoringConfig — validated settings for one scoring run."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from iscore.core.exceptions import ConfigError
from iscore.core.models import RANGE_MODES, SCORING_MODES


@dataclass(frozen=True)
class ScoringConfig:
    """How a batch is scored.

    Attributes:
        mode: "novel" (I-Score, default) or "classic" (IHC-Score).
        range_mode: "local" (per image), "global" (per batch) or "fixed".
        fixed_ranges: (min, max) pairs for fixed mode. A single pair
            applies to every channel; otherwise pairs match channel indices.
        extension: Only score files with this extension in batch runs.
    """

    mode: str = "novel"
    range_mode: str = "local"
    fixed_ranges: tuple[tuple[float, float], ...] = field(default_factory=tuple)
    extension: str | None = None

    def __post_init__(self) -> None:
        """Validate modes and fixed ranges at construction time."""
        if self.mode not in SCORING_MODES:
            raise ConfigError(
                f"Invalid scoring mode: {self.mode!r}. "
                f"Must be one of {sorted(SCORING_MODES)}"
            )
        if self.range_mode not in RANGE_MODES:
            raise ConfigError(
                f"Invalid range mode: {self.range_mode!r}. "
                f"Must be one of {sorted(RANGE_MODES)}"
            )
        pairs = tuple((float(lo), float(hi)) for lo, hi in self.fixed_ranges)
        object.__setattr__(self, "fixed_ranges", pairs)

        if self.range_mode == "fixed" and not pairs:
            raise ConfigError("fixed_ranges is required when range_mode is 'fixed'")
        if self.range_mode != "fixed" and pairs:
            raise ConfigError(
                f"fixed_ranges is only used when range_mode is 'fixed', "
                f"got range_mode={self.range_mode!r}"
            )
        for lo, hi in pairs:
            if not (math.isfinite(lo) and math.isfinite(hi)):
                raise ConfigError(f"Fixed range bounds must be finite, got ({lo}, {hi})")
            if lo > hi:
                raise ConfigError(f"Fixed range minimum {lo} exceeds maximum {hi}")

    def to_yaml(self, path: Path) -> None:
        """Serialize this config to a YAML file."""
        from iscore.serialization import config_to_yaml

        config_to_yaml(self, path)

    @classmethod
    def from_yaml(cls, path: Path) -> ScoringConfig:
        """Deserialize a ScoringConfig from a YAML file."""
        from iscore.serialization import config_from_yaml

        return config_from_yaml(path)
