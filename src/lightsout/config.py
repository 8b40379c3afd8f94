from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .difficulty import DifficultyTier
from .generator import DEFAULT_MAX_ATTEMPTS
from .influence import InfluencePattern


class ConfigError(ValueError):
    """Raised when a sweep configuration cannot be used."""

    pass


@dataclass(frozen=True)
class SweepConfig:
    patterns: tuple[InfluencePattern, ...] = tuple(InfluencePattern)
    tiers: tuple[DifficultyTier, ...] = tuple(DifficultyTier)
    level_indices: tuple[int, ...] = (0, 4, 8)
    n_seeds: int = 200
    seed_prefix: str = "sweep"
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    output_dir: str = "results/sweeps"

    def seeds(self) -> list[str]:
        return [f"{self.seed_prefix}-{i}" for i in range(self.n_seeds)]


def _positive_int(cfg: dict, key: str, default: int) -> int:
    value = cfg.get(key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if value < 1:
        raise ConfigError(f"{key} must be >= 1, got {value}")
    return value


def parse_sweep_config(raw: dict | None) -> SweepConfig:
    """Validate the ``experiment`` mapping of a sweep YAML file."""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid experiment section: {raw!r}")

    defaults = SweepConfig()
    try:
        patterns = tuple(
            InfluencePattern.parse(p) for p in raw.get("patterns", defaults.patterns)
        )
        tiers = tuple(DifficultyTier.parse(t) for t in raw.get("tiers", defaults.tiers))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    levels = raw.get("level_indices", defaults.level_indices)
    if not isinstance(levels, (list, tuple)) or not all(
        isinstance(x, int) and not isinstance(x, bool) and x >= 0 for x in levels
    ):
        raise ConfigError(f"level_indices must be non-negative ints, got {levels!r}")

    if not patterns or not tiers or not levels:
        raise ConfigError("patterns, tiers and level_indices must not be empty")

    return SweepConfig(
        patterns=patterns,
        tiers=tiers,
        level_indices=tuple(levels),
        n_seeds=_positive_int(raw, "n_seeds", defaults.n_seeds),
        seed_prefix=str(raw.get("seed_prefix", defaults.seed_prefix)),
        max_attempts=_positive_int(raw, "max_attempts", defaults.max_attempts),
        output_dir=str(raw.get("output_dir", defaults.output_dir)),
    )


def load_sweep_config(path: str | Path) -> SweepConfig:
    with open(path, "r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ConfigError(f"Invalid sweep config in {path}")
    return parse_sweep_config(doc.get("experiment"))
