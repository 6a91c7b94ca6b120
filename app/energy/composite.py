"""Composite aggregator — runs every subsystem scorer and folds the results.

A failing scorer never fails the reading: it is logged, recorded as a
diagnostic and left out of the mean.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from app.energy.astrology import score_astrology
from app.energy.biorhythm import score_biorhythm
from app.energy.context import ReadingContext
from app.energy.dates import coerce_date
from app.energy.errors import SUBSYSTEM_FAILURE, ProfileMissing, SubsystemComputationFailure
from app.energy.features import mean, population_stddev, round_half_up
from app.energy.lunar import score_lunar
from app.energy.models import CompositeResult, SubsystemResult, UserProfile
from app.energy.numerology import score_numerology

log = logging.getLogger(__name__)

NEUTRAL_SCORE = 50

Scorer = Callable[..., SubsystemResult]  # (birth, target, location)

# Insertion order is the reporting order.
SCORERS: dict[str, Scorer] = {
    "numerology": score_numerology,
    "lunar": score_lunar,
    "astrology": score_astrology,
    "biorhythm": score_biorhythm,
}

ENERGY_TYPES: tuple[tuple[str, str], ...] = (
    ("Creative Flow", "High imagination and innovation"),
    ("Focused Execution", "Deep concentration and completion"),
    ("Reflective Pause", "Strategic thinking and planning"),
    ("Communicative Energy", "Networking and collaboration"),
    ("Grounded Stability", "Practical and organized"),
    ("High Momentum", "Fast-paced action and initiative"),
    ("Structured Growth", "Methodical progress and building"),
    ("Transformative", "Change and renewal"),
    ("Harmonious", "Balance and cooperation"),
)
FALLBACK_ENERGY_TYPE = ("Balanced", "Numerology unavailable; no energy type could be derived")


def energy_type(life_path: int, personal_day: int) -> tuple[str, str]:
    return ENERGY_TYPES[(life_path + personal_day) % len(ENERGY_TYPES)]


def dominant_influence(subsystems: dict[str, SubsystemResult]) -> str | None:
    """Subsystem whose score sits farthest from neutral. Ties keep the first."""
    best: str | None = None
    best_distance = -1.0
    for name, result in subsystems.items():
        if result.score is None:
            continue
        distance = abs(result.score - NEUTRAL_SCORE)
        if distance > best_distance:
            best, best_distance = name, distance
    return best


def confidence_score(scores: list[float]) -> int:
    """Agreement between subsystems: 100 when they all match."""
    return max(0, round_half_up(100 - 2 * population_stddev(scores)))


def _run_scorer(
    name: str,
    scorer: Scorer,
    profile: UserProfile,
    target: date,
    ctx: ReadingContext,
) -> SubsystemResult | None:
    try:
        result = scorer(profile.date_of_birth, target, profile.place_of_birth)
    except Exception as exc:
        failure = SubsystemComputationFailure(name, exc)
        log.warning("Subsystem %s failed for %s: %s", name, target, exc)
        ctx.record(f"subsystem.{name}", success=False, error=failure)
        ctx.diagnose(SUBSYSTEM_FAILURE, name, str(failure))
        return None
    ctx.record(f"subsystem.{name}", data={"score": result.score})
    return result


def compute_composite(
    profile: UserProfile | None,
    target: date | datetime | str,
    ctx: ReadingContext | None = None,
) -> CompositeResult:
    if profile is None or not profile.date_of_birth:
        raise ProfileMissing()
    ctx = ctx if ctx is not None else ReadingContext()
    day = coerce_date(target)
    diagnostics_before = len(ctx.diagnostics)

    subsystems: dict[str, SubsystemResult] = {}
    for name, scorer in SCORERS.items():
        result = _run_scorer(name, scorer, profile, day, ctx)
        if result is not None:
            subsystems[name] = result

    scores = [r.score for r in subsystems.values() if r.score is not None]
    base = round_half_up(mean(scores)) if scores else NEUTRAL_SCORE

    numerology = subsystems.get("numerology")
    if numerology is not None:
        kind, description = energy_type(
            numerology.details["life_path"], numerology.details["personal_day"]
        )
    else:
        kind, description = FALLBACK_ENERGY_TYPE

    ctx.record("composite", data={"base_score": base, "subsystems": len(subsystems)})
    return CompositeResult(
        date=day.isoformat(),
        base_score=base,
        energy_type=kind,
        energy_description=description,
        dominant_influence=dominant_influence(subsystems),
        confidence_score=confidence_score(scores) if scores else 0,
        subsystems=subsystems,
        diagnostics=list(ctx.diagnostics[diagnostics_before:]),
    )
