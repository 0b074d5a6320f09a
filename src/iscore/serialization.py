"""YAML serialization for ScoringConfig.

Requires pyyaml. Raises ImportError with clear install instructions
if pyyaml is not available.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from iscore.config import ScoringConfig
from iscore.core.exceptions import ConfigError


def _require_yaml() -> Any:
    """Import and return the yaml module, or raise a helpful error."""
    try:
        import yaml

        return yaml
    except ImportError:
        raise ImportError(
            "pyyaml is required for scoring config serialization. "
            "Install it with: pip install pyyaml"
        ) from None


def config_to_yaml(config: ScoringConfig, path: Path) -> None:
    """Serialize a ScoringConfig to a YAML file.

    Args:
        config: The config to serialize.
        path: File path to write.
    """
    yaml = _require_yaml()

    data: dict[str, Any] = {
        "mode": config.mode,
        "range_mode": config.range_mode,
    }
    if config.fixed_ranges:
        data["fixed_ranges"] = [
            {"min": lo, "max": hi} for lo, hi in config.fixed_ranges
        ]
    if config.extension is not None:
        data["extension"] = config.extension

    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def config_from_yaml(path: Path) -> ScoringConfig:
    """Deserialize a ScoringConfig from a YAML file.

    Missing keys take their defaults.

    Args:
        path: Path to the YAML file.

    Returns:
        The validated ScoringConfig.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        ConfigError: If the YAML is malformed or fails validation.
    """
    yaml = _require_yaml()

    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid scoring config YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid scoring config YAML: expected a mapping, got {type(data).__name__}"
        )

    fixed_ranges = []
    for entry in data.get("fixed_ranges") or []:
        try:
            fixed_ranges.append((float(entry["min"]), float(entry["max"])))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Invalid fixed range entry {entry!r}: expected 'min' and 'max' numbers"
            ) from e

    return ScoringConfig(
        mode=data.get("mode", "novel"),
        range_mode=data.get("range_mode", "local"),
        fixed_ranges=tuple(fixed_ranges),
        extension=data.get("extension"),
    )
