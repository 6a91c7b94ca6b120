"""Reading pipeline.

build_reading is pure. The async functions around it load from a LogStore,
call the pure core, and (for correlations) write the cache back.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from app.energy.adjustments import apply_adjustments, compute_adjustments
from app.energy.biorhythm import biorhythm_range, critical_days, optimal_days
from app.energy.composite import compute_composite
from app.energy.context import ReadingContext
from app.energy.correlation import analyze_correlations
from app.energy.dates import coerce_date, iter_days
from app.energy.errors import ProfileMissing
from app.energy.interpretation import interpret, personality_type
from app.energy.lunar import next_significant_phase, sleep_moon_correlation
from app.energy.models import (
    CompositeResult,
    Correlation,
    DailyEnergyReading,
    Forecast,
    LogCategory,
    LogsByCategory,
    ScorePoint,
    SleepMoonCorrelation,
    UserProfile,
)
from app.energy.store import LogStore, gather_logs

log = logging.getLogger(__name__)


def _life_path(composite: CompositeResult) -> int | None:
    """Life Path from the numerology result; None when that subsystem failed."""
    numerology = composite.subsystems.get("numerology")
    if numerology is None:
        return None
    return numerology.details.get("life_path")


def build_reading(
    profile: UserProfile | None,
    target: date | datetime | str,
    todays_logs: LogsByCategory,
    correlations: list[Correlation] | None = None,
    ctx: ReadingContext | None = None,
) -> DailyEnergyReading:
    ctx = ctx if ctx is not None else ReadingContext()
    composite = compute_composite(profile, target, ctx)

    adjustments = compute_adjustments(composite.date, todays_logs, correlations)
    adjusted = apply_adjustments(composite.base_score, adjustments)
    ctx.record("adjustments", data={"count": len(adjustments), "adjusted_score": adjusted})

    life_path = _life_path(composite)
    kind = personality_type(life_path)
    insight = interpret(
        adjusted,
        composite.subsystems,
        adjustments,
        kind,
        base_score=composite.base_score,
        life_path=life_path,
    )
    ctx.record("interpretation", data={"prediction": insight.prediction.success_rate})

    return DailyEnergyReading(
        date=composite.date,
        base_score=composite.base_score,
        adjusted_score=adjusted,
        energy_type=composite.energy_type,
        energy_description=composite.energy_description,
        dominant_influence=composite.dominant_influence,
        confidence_score=composite.confidence_score,
        subsystems=composite.subsystems,
        adjustments=adjustments,
        insight=insight,
        prediction=insight.prediction,
        diagnostics=list(ctx.diagnostics),
    )


async def compute_daily_reading(
    store: LogStore,
    profile: UserProfile | None,
    target: date | datetime | str,
    ctx: ReadingContext | None = None,
) -> DailyEnergyReading:
    if profile is None or not profile.date_of_birth:
        raise ProfileMissing()
    ctx = ctx if ctx is not None else ReadingContext()
    day = coerce_date(target)

    todays_logs = await gather_logs(store, day, day + timedelta(days=1))
    correlations = await store.get_correlations()
    ctx.record("load", data={
        "entries": sum(len(v) for v in todays_logs.values()),
        "correlations": len(correlations),
    })
    return build_reading(profile, day, todays_logs, correlations, ctx)


def score_history(
    profile: UserProfile | None,
    start: date | datetime | str,
    end_exclusive: date | datetime | str,
    ctx: ReadingContext | None = None,
) -> list[ScorePoint]:
    """Composite base score for every day in [start, end_exclusive)."""
    ctx = ctx if ctx is not None else ReadingContext()
    return [
        ScorePoint(date=day.isoformat(), score=compute_composite(profile, day, ctx).base_score)
        for day in iter_days(coerce_date(start), coerce_date(end_exclusive))
    ]


async def refresh_correlations(
    store: LogStore,
    profile: UserProfile | None,
    start: date | datetime | str,
    end_exclusive: date | datetime | str,
    ctx: ReadingContext | None = None,
) -> list[Correlation]:
    if profile is None or not profile.date_of_birth:
        raise ProfileMissing()
    ctx = ctx if ctx is not None else ReadingContext()
    first, stop = coerce_date(start), coerce_date(end_exclusive)

    history = score_history(profile, first, stop, ReadingContext())
    logs = await gather_logs(store, first, stop)
    correlations = analyze_correlations(history, logs, ctx)
    await store.save_correlations(correlations)
    log.info(
        "Refreshed %d correlations over %s..%s (%d days)",
        len(correlations), first, stop, len(history),
    )
    return correlations


def forecast(
    profile: UserProfile | None,
    start: date | datetime | str,
    days: int,
) -> Forecast:
    """Biorhythm outlook for the coming days plus the next lunar milestone."""
    if profile is None or not profile.date_of_birth:
        raise ProfileMissing()
    first = coerce_date(start)
    birth = profile.date_of_birth
    return Forecast(
        start=first.isoformat(),
        days=biorhythm_range(birth, first, days),
        optimal_days=optimal_days(birth, first, days),
        critical_days=critical_days(birth, first, days),
        next_lunar_phase=next_significant_phase(first),
    )


async def sleep_moon_report(
    store: LogStore,
    start: date | datetime | str,
    end_exclusive: date | datetime | str,
) -> SleepMoonCorrelation:
    entries = await store.get_entries(
        LogCategory.sleep, coerce_date(start), coerce_date(end_exclusive)
    )
    report = sleep_moon_correlation(entries)
    log.debug("Sleep/moon correlation over %d nights: %s", len(entries), report.correlation)
    return report
