"""Pure stateless feature functions — math only, never raises."""

from __future__ import annotations

import math

# Matched-point thresholds for correlation confidence
MIN_MATCHED_POINTS = 5
MEDIUM_CONFIDENCE_POINTS = 10
HIGH_CONFIDENCE_POINTS = 20


def aggregate(values: list[float], method: str) -> float | None:
    """Aggregate a list of floats by method. Returns None if empty."""
    if not values:
        return None
    if method == "sum":
        return sum(values)
    if method == "avg":
        return sum(values) / len(values)
    if method == "max":
        return max(values)
    if method == "min":
        return min(values)
    if method == "last":
        return values[-1]
    # Unknown method falls back to avg
    return sum(values) / len(values)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side (JS Math.round semantics)."""
    return int(math.floor(value + 0.5))


def mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def population_stddev(values: list[float]) -> float:
    if not values:
        return 0.0
    m = sum(values) / len(values)
    return math.sqrt(sum((v - m) ** 2 for v in values) / len(values))


def pearson_correlation(x: list[float], y: list[float]) -> float:
    """Pearson r via the raw-sums formula.

    r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    Mismatched or empty inputs and degenerate (constant) series give 0.
    """
    if len(x) != len(y) or not x:
        return 0.0
    if max(x) == min(x) or max(y) == min(y):
        return 0.0
    n = len(x)
    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if spread <= 0:
        return 0.0
    r = numerator / math.sqrt(spread)
    return clamp(r, -1.0, 1.0)


def average_impact(values: list[float], scores: list[float]) -> float:
    """Mean of (score_i − mean score) over the matched points.

    A proxy for a factor's typical marginal effect, not a regression
    coefficient. Does not normalise by factor variance.
    """
    if not values or not scores:
        return 0.0
    avg = sum(scores) / len(scores)
    n = min(len(values), len(scores))
    return sum(scores[i] - avg for i in range(n)) / n


def confidence_tier(sample_size: int) -> str:
    """Map matched-point count to "low" | "medium" | "high"."""
    if sample_size >= HIGH_CONFIDENCE_POINTS:
        return "high"
    if sample_size >= MEDIUM_CONFIDENCE_POINTS:
        return "medium"
    return "low"


def sine_cycle(days: int, period: int) -> int:
    """Sinusoidal cycle value in [-100, 100] for `days` into a `period`-day cycle."""
    position = (days % period) / period
    return round_half_up(math.sin(2 * math.pi * position) * 100)


def wrap_degrees(value: float) -> float:
    wrapped = value % 360.0
    return wrapped + 360.0 if wrapped < 0 else wrapped


def angular_distance(a: float, b: float) -> float:
    """Shortest arc between two ecliptic longitudes, 0–180."""
    distance = abs(b - a) % 360.0
    return 360.0 - distance if distance > 180 else distance
