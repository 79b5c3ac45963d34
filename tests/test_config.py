"""Tests for configuration loading and validation."""

import json

import pytest

from phonver.core.config import (
    DEFAULT_CONFIG_PATH,
    Feature,
    Thresholds,
    VersionConfig,
    load_config,
    parse_config,
)
from phonver.core.errors import ConfigError


class TestDefaults:
    def test_bundled_file_matches_defaults(self):
        assert load_config(DEFAULT_CONFIG_PATH).model_dump() == VersionConfig().model_dump()

    def test_encoding_defaults(self):
        enc = VersionConfig().encoding
        assert enc.base_interval == 180
        assert enc.max_syllables == 6
        assert enc.digit_interleaving is True
        assert [s.interval for s in enc.compression_intervals] == [900, 3600, 86400]

    def test_thresholds(self):
        t = VersionConfig().separators.thresholds
        assert (t.first, t.second, t.third) == (80, 70, 60)
        assert VersionConfig().separators.max_separators == 2

    def test_round_thresholds(self):
        t = Thresholds()
        assert t.for_round(0) == 80
        assert t.for_round(1) == 70
        assert t.for_round(2) == 60
        assert t.for_round(7) == 60

    def test_disabled_feature_contributes_nothing(self):
        assert Feature(weight=5, enabled=False).value == 0.0
        assert Feature(weight=5).value == 5.0
        assert VersionConfig().scoring.colon.rhythmic_pair.value == 0.0


class TestValidation:
    """Invalid configurations are rejected up front."""

    def test_increasing_thresholds(self):
        with pytest.raises(ConfigError, match="thresholds"):
            parse_config({"separators": {"thresholds": {"first": 50, "second": 70}}})

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            parse_config({"encoding": {"base_intervall": 60}})

    def test_strength_out_of_range(self):
        with pytest.raises(ConfigError):
            parse_config({"balancing": {"diversity_strength": 1.5}})

    def test_unknown_target_kind(self):
        with pytest.raises(ConfigError, match="unknown separator"):
            parse_config({"balancing": {"targets": {"space": 50, "slash": 10}}})

    def test_repetition_priorities_must_decrease(self):
        with pytest.raises(ConfigError, match="priorities"):
            parse_config({"scoring": {"repetition": {
                "identical_2": {"priority": 120, "hyphen": 100, "space": 20},
            }}})

    def test_cluster_entries_are_pairs(self):
        with pytest.raises(ConfigError, match="two letters"):
            parse_config({"scoring": {"impossible_clusters": {"critical": ["tl", "xyz"]}}})

    def test_non_positive_interval(self):
        with pytest.raises(ConfigError):
            parse_config({"encoding": {"base_interval": 0}})

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_config({"separators": {"max_separators": -1}})

    def test_partial_override_keeps_other_defaults(self):
        config = parse_config({"separators": {"max_separators": 3}})
        assert config.separators.max_separators == 3
        assert config.separators.thresholds.first == 80
        assert config.encoding.base_interval == 180


class TestLoadConfig:
    def test_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"encoding": {"base_interval": 60}}))
        monkeypatch.setenv("PHONVER_CONFIG", str(path))
        assert load_config().encoding.base_interval == 60

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PHONVER_CONFIG", str(tmp_path / "missing.json"))
        assert load_config(DEFAULT_CONFIG_PATH).encoding.base_interval == 180

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.json")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)
