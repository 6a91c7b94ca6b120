"""Lunar phase scorer.

Phase is measured from a known new moon using the mean synodic month.
Life Path 6 and 7 are lunar-sensitive: on strong phases the deviation
from neutral is doubled for them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from app.energy.dates import coerce_date
from app.energy.features import clamp, mean, round_half_up
from app.energy.models import (
    BirthPlace,
    NextPhase,
    SleepEntry,
    SleepMoonCorrelation,
    SubsystemResult,
)
from app.energy.numerology import life_path_number

KNOWN_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=timezone.utc)
SYNODIC_MONTH_DAYS = 29.53058867
NEUTRAL_INFLUENCE = 50.0
LUNAR_SENSITIVE_LIFE_PATHS = frozenset({6, 7})
SENSITIVE_MULTIPLIER = 2.0

# New, first quarter, full, last quarter
SIGNIFICANT_FRACTIONS = (0.0, 0.25, 0.5, 0.75)

FULL_MOON_WINDOW = (0.45, 0.55)
NEW_MOON_EDGE = 0.05  # fraction <= edge or >= 1 - edge
MIN_PHASE_NIGHTS = 3
SLEEP_QUALITY_SCORES = {"poor": 1, "fair": 2, "good": 3, "excellent": 4}


@dataclass(frozen=True, slots=True)
class PhaseInfo:
    name: str
    upper_bound: float  # exclusive upper edge of the phase fraction
    influence: int  # 0–100
    strong: bool
    explanation: str
    sensitive_note: str


# Ordered by upper_bound; New Moon also covers [0.9375, 1.0).
PHASES: tuple[PhaseInfo, ...] = (
    PhaseInfo("New Moon", 0.0625, 70, True,
              "Time for new intentions and fresh starts",
              "amplified for your personality type"),
    PhaseInfo("Waxing Crescent", 0.1875, 75, False,
              "Energy building, good for taking action",
              "strong intuitive period for you"),
    PhaseInfo("First Quarter", 0.3125, 80, False,
              "Decision-making time, overcome obstacles",
              "your intuition is sharp"),
    PhaseInfo("Waxing Gibbous", 0.4375, 85, False,
              "Refinement and adjustment period",
              "trust your gut"),
    PhaseInfo("Full Moon", 0.5625, 95, True,
              "Peak energy and manifestation",
              "your intuition is at its peak - 2x impact for you!"),
    PhaseInfo("Waning Gibbous", 0.6875, 85, False,
              "Gratitude and sharing phase",
              "reflect on insights gained"),
    PhaseInfo("Last Quarter", 0.8125, 75, False,
              "Release and let go",
              "powerful clearing time for you"),
    PhaseInfo("Waning Crescent", 0.9375, 65, False,
              "Rest and restoration",
              "honor your need for solitude"),
)


def moon_phase_fraction(target: date | datetime | str) -> float:
    """0 = new moon, 0.5 = full moon, at UTC midnight of the target day."""
    day = coerce_date(target)
    moment = datetime.combine(day, time.min, tzinfo=timezone.utc)
    elapsed_days = (moment - KNOWN_NEW_MOON).total_seconds() / 86400.0
    return (elapsed_days % SYNODIC_MONTH_DAYS) / SYNODIC_MONTH_DAYS


def phase_for_fraction(fraction: float) -> PhaseInfo:
    for phase in PHASES:
        if fraction < phase.upper_bound:
            return phase
    return PHASES[0]


def lunar_multiplier(phase: PhaseInfo, life_path: int) -> float:
    if phase.strong and life_path in LUNAR_SENSITIVE_LIFE_PATHS:
        return SENSITIVE_MULTIPLIER
    return 1.0


def score_lunar(
    birth: date | datetime | str,
    target: date | datetime | str,
    location: BirthPlace | None = None,
) -> SubsystemResult:
    fraction = moon_phase_fraction(target)
    phase = phase_for_fraction(fraction)
    life_path = life_path_number(birth)
    multiplier = lunar_multiplier(phase, life_path)

    score = clamp(NEUTRAL_INFLUENCE + (phase.influence - NEUTRAL_INFLUENCE) * multiplier)

    headline = f"{phase.name}: {phase.explanation}"
    if life_path in LUNAR_SENSITIVE_LIFE_PATHS:
        headline += f" ({phase.sensitive_note})"

    return SubsystemResult(
        name="lunar",
        score=score,
        label=phase.name,
        facts=[headline, f"Moon cycle {round(fraction * 100)}% complete"],
        details={
            "phase": phase.name,
            "fraction": round(fraction, 4),
            "influence": phase.influence,
            "multiplier": multiplier,
        },
    )


def next_significant_phase(target: date | datetime | str) -> NextPhase:
    """Nearest upcoming new, first quarter, full or last quarter moon."""
    day = coerce_date(target)
    current = moon_phase_fraction(day)

    nearest, days_to = SIGNIFICANT_FRACTIONS[0], math.inf
    for fraction in SIGNIFICANT_FRACTIONS:
        days = ((fraction - current) % 1.0) * SYNODIC_MONTH_DAYS
        if days < days_to:
            nearest, days_to = fraction, days

    moment = datetime.combine(day, time.min, tzinfo=timezone.utc) + timedelta(days=days_to)
    return NextPhase(
        phase=phase_for_fraction(nearest).name,
        date=moment.date().isoformat(),
        days_until=math.ceil(days_to),
    )


def _is_full(fraction: float) -> bool:
    low, high = FULL_MOON_WINDOW
    return low <= fraction <= high


def _is_new(fraction: float) -> bool:
    return fraction <= NEW_MOON_EDGE or fraction >= 1.0 - NEW_MOON_EDGE


def sleep_moon_correlation(entries: list[SleepEntry]) -> SleepMoonCorrelation:
    """Compare sleep quality on nights around full moons and new moons."""
    full: list[float] = []
    new: list[float] = []
    for entry in entries:
        quality = SLEEP_QUALITY_SCORES[entry.quality]
        fraction = moon_phase_fraction(entry.date)
        if _is_full(fraction):
            full.append(quality)
        elif _is_new(fraction):
            new.append(quality)

    full_avg = mean(full) or 0.0
    new_avg = mean(new) or 0.0
    correlation = "neutral"
    insight = "Not enough data to determine lunar correlation."

    if len(full) >= MIN_PHASE_NIGHTS and len(new) >= MIN_PHASE_NIGHTS:
        diff = full_avg - new_avg
        if abs(diff) < 0.5:
            insight = "Moon phases don't significantly affect your sleep quality."
        elif diff > 0:
            correlation = "positive"
            insight = (
                f"You sleep {round_half_up(diff / new_avg * 100)}% better during full moons. "
                "Consider planning important rest during this phase."
            )
        else:
            correlation = "negative"
            insight = (
                f"You sleep {round_half_up(-diff / full_avg * 100)}% better during new moons. "
                "Full moons may disrupt your sleep - try extra relaxation techniques."
            )

    return SleepMoonCorrelation(
        full_moon_avg=round_half_up(full_avg * 10) / 10,
        new_moon_avg=round_half_up(new_avg * 10) / 10,
        correlation=correlation,
        insight=insight,
    )
