"""Tests for loading sweep configuration from YAML."""

import pytest

from lightsout.config import ConfigError, SweepConfig, load_sweep_config, parse_sweep_config
from lightsout.difficulty import DifficultyTier
from lightsout.influence import InfluencePattern


def _write(tmp_path, text):
    path = tmp_path / "sweep.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoad:
    def test_full_config(self, tmp_path):
        path = _write(
            tmp_path,
            """
experiment:
  patterns: [plus, knight]
  tiers: [hard]
  level_indices: [0, 9]
  n_seeds: 3
  seed_prefix: demo
  max_attempts: 10
  output_dir: out
""",
        )
        cfg = load_sweep_config(path)
        assert cfg.patterns == (InfluencePattern.PLUS, InfluencePattern.KNIGHT)
        assert cfg.tiers == (DifficultyTier.HARD,)
        assert cfg.level_indices == (0, 9)
        assert cfg.max_attempts == 10
        assert cfg.output_dir == "out"
        assert cfg.seeds() == ["demo-0", "demo-1", "demo-2"]

    def test_defaults(self, tmp_path):
        cfg = load_sweep_config(_write(tmp_path, "experiment: {}\n"))
        assert cfg == SweepConfig()
        assert len(cfg.patterns) == 3
        assert cfg.max_attempts == 30

    def test_missing_experiment_section(self, tmp_path):
        assert load_sweep_config(_write(tmp_path, "other: 1\n")) == SweepConfig()

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_sweep_config(_write(tmp_path, "- a\n- b\n"))


class TestValidation:
    def test_unknown_pattern(self):
        with pytest.raises(ConfigError, match="Unknown influence pattern"):
            parse_sweep_config({"patterns": ["plus", "spiral"]})

    def test_unknown_tier(self):
        with pytest.raises(ConfigError):
            parse_sweep_config({"tiers": ["impossible"]})

    @pytest.mark.parametrize("value", [0, -2, "many"])
    def test_bad_counts(self, value):
        with pytest.raises(ConfigError):
            parse_sweep_config({"n_seeds": value})

    def test_bad_levels(self):
        with pytest.raises(ConfigError):
            parse_sweep_config({"level_indices": [0, -1]})

    def test_bool_levels_rejected(self):
        with pytest.raises(ConfigError):
            parse_sweep_config({"level_indices": [True, 2]})

    def test_empty_lists(self):
        with pytest.raises(ConfigError):
            parse_sweep_config({"patterns": []})

    def test_is_value_error(self):
        assert issubclass(ConfigError, ValueError)
