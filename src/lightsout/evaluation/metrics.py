from __future__ import annotations

from ..difficulty import DifficultyBand


def in_band(weight: int, band: DifficultyBand) -> int:
    return int(band.contains(weight))


def band_miss(weight: int, band: DifficultyBand) -> int:
    # how far outside the band a weight landed (0 if inside)
    if weight < band.min_weight:
        return band.min_weight - weight
    if weight > band.max_weight:
        return weight - band.max_weight
    return 0


def in_band_rate(rows) -> float:
    """Fraction of sweep rows whose ``in_band`` flag is set."""
    rows = list(rows)
    if not rows:
        return 0.0
    return sum(int(r["in_band"]) for r in rows) / len(rows)


def summarize_weights(weights) -> dict:
    weights = [int(w) for w in weights]
    if not weights:
        return {"count": 0, "mean": 0.0, "min": 0, "max": 0}
    return {
        "count": len(weights),
        "mean": sum(weights) / len(weights),
        "min": min(weights),
        "max": max(weights),
    }
