"""Tests for iscore.serialization — YAML round-trip for ScoringConfig."""

from __future__ import annotations

import pytest
import yaml

from iscore.config import ScoringConfig
from iscore.core.exceptions import ConfigError


class TestRoundTrip:
    def test_fixed_config_round_trips(self, tmp_path):
        config = ScoringConfig(
            mode="classic",
            range_mode="fixed",
            fixed_ranges=((0, 255), (10, 4095)),
            extension=".tif",
        )
        path = tmp_path / "scoring.yaml"
        config.to_yaml(path)
        assert ScoringConfig.from_yaml(path) == config

    def test_default_config_round_trips(self, tmp_path):
        path = tmp_path / "scoring.yaml"
        ScoringConfig().to_yaml(path)
        assert ScoringConfig.from_yaml(path) == ScoringConfig()

    def test_optional_keys_omitted(self, tmp_path):
        path = tmp_path / "scoring.yaml"
        ScoringConfig(range_mode="global").to_yaml(path)
        data = yaml.safe_load(path.read_text())
        assert data == {"mode": "novel", "range_mode": "global"}

    def test_written_yaml_is_readable(self, tmp_path):
        path = tmp_path / "scoring.yaml"
        ScoringConfig(range_mode="fixed", fixed_ranges=((0, 100),)).to_yaml(path)
        data = yaml.safe_load(path.read_text())
        assert data["fixed_ranges"] == [{"min": 0.0, "max": 100.0}]


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ScoringConfig.from_yaml(tmp_path / "missing.yaml")

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ScoringConfig.from_yaml(path) == ScoringConfig()

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- novel\n- global\n")
        with pytest.raises(ConfigError, match="expected a mapping"):
            ScoringConfig.from_yaml(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mode: [novel\n")
        with pytest.raises(ConfigError, match="Invalid scoring config YAML"):
            ScoringConfig.from_yaml(path)

    def test_bad_fixed_range_entry(self, tmp_path):
        path = tmp_path / "bad_range.yaml"
        path.write_text("range_mode: fixed\nfixed_ranges:\n  - {min: 0}\n")
        with pytest.raises(ConfigError, match="Invalid fixed range entry"):
            ScoringConfig.from_yaml(path)

    def test_invalid_mode_in_file(self, tmp_path):
        path = tmp_path / "mode.yaml"
        path.write_text("mode: hscore\n")
        with pytest.raises(ConfigError, match="Invalid scoring mode"):
            ScoringConfig.from_yaml(path)
