"""Correlation engine — lifestyle factors against historical energy scores.

Pure: takes the score history and the logs, returns Correlation objects.
Loading and caching live in pipeline.refresh_correlations.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from app.energy.context import ReadingContext
from app.energy.dates import coerce_date
from app.energy.errors import INSUFFICIENT_DATA
from app.energy.factor_map import FACTOR_CONFIG, FactorConfig
from app.energy.features import (
    MIN_MATCHED_POINTS,
    aggregate,
    average_impact,
    confidence_tier,
    pearson_correlation,
    round_half_up,
)
from app.energy.models import Correlation, LogEntry, LogsByCategory, ScorePoint, TopFactor

log = logging.getLogger(__name__)


def _entry_value(entry: Any, field: str) -> float | None:
    raw = entry.get(field) if isinstance(entry, dict) else getattr(entry, field, None)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return float(raw)


def _entry_key(entry: Any) -> str:
    raw = entry.get("date") if isinstance(entry, dict) else entry.date
    return coerce_date(raw).isoformat()


def daily_factor_values(entries: list[LogEntry], cfg: FactorConfig) -> dict[str, float]:
    """Fold one category's entries into {day_key: factor value}."""
    by_day: dict[str, list[float]] = defaultdict(list)
    for entry in entries:
        value = _entry_value(entry, cfg.field)
        if value is not None:
            by_day[_entry_key(entry)].append(value)

    values: dict[str, float] = {}
    for key, day_values in by_day.items():
        folded = aggregate(day_values, cfg.agg)
        if folded is None:
            continue
        if cfg.agg == "sum" and folded <= 0:
            continue
        values[key] = folded
    return values


def match_factor(
    score_history: list[ScorePoint],
    entries: list[LogEntry],
    cfg: FactorConfig,
) -> tuple[list[float], list[float]]:
    """Date-key join of factor values against scores, in score order."""
    daily = daily_factor_values(entries, cfg)
    xs: list[float] = []
    ys: list[float] = []
    for point in score_history:
        key = coerce_date(point.date).isoformat()
        if key in daily:
            xs.append(daily[key])
            ys.append(float(point.score))
    return xs, ys


def analyze_correlations(
    score_history: list[ScorePoint],
    logs: LogsByCategory,
    ctx: ReadingContext | None = None,
) -> list[Correlation]:
    correlations: list[Correlation] = []
    for factor, cfg in FACTOR_CONFIG.items():
        entries = logs.get(cfg.category) or []
        if not entries:
            log.debug("No %s logs; skipping %s", cfg.category.value, factor)
            continue

        xs, ys = match_factor(score_history, entries, cfg)
        if len(xs) < MIN_MATCHED_POINTS:
            log.debug("Factor %s has %d matched points; need %d", factor, len(xs), MIN_MATCHED_POINTS)
            if ctx is not None:
                ctx.diagnose(
                    INSUFFICIENT_DATA,
                    factor,
                    f"{len(xs)} matched days, need {MIN_MATCHED_POINTS}",
                )
            continue

        correlations.append(Correlation(
            factor=factor,
            strength=pearson_correlation(xs, ys),
            impact=average_impact(xs, ys),
            sample_size=len(xs),
            confidence=confidence_tier(len(xs)),
        ))

    if ctx is not None:
        ctx.record("correlations", data={"factors": [c.factor for c in correlations]})
    return correlations


def trusted(correlations: list[Correlation] | None) -> dict[str, Correlation]:
    """Correlations allowed to drive adjustments, keyed by factor."""
    return {c.factor: c for c in correlations or [] if c.confidence != "low"}


def _format_points(impact: float) -> str:
    points = round_half_up(impact)
    return f"+{points} points" if points > 0 else f"{points} points"


def top_energy_factors(correlations: list[Correlation], limit: int = 5) -> list[TopFactor]:
    ranked = sorted(trusted(correlations).values(), key=lambda c: abs(c.strength), reverse=True)
    return [
        TopFactor(factor=c.factor, impact=_format_points(c.impact), strength=c.strength)
        for c in ranked[:limit]
    ]
