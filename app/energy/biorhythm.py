"""Biorhythm scorer: physical, emotional and intellectual sine cycles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from app.energy.dates import coerce_date
from app.energy.features import clamp, round_half_up, sine_cycle
from app.energy.models import (
    BiorhythmDay,
    BirthPlace,
    Compatibility,
    CycleReading,
    SubsystemResult,
)

CYCLE_PERIODS: dict[str, int] = {
    "Physical": 23,
    "Emotional": 28,
    "Intellectual": 33,
}

CRITICAL_BAND = 5  # |value| below this is a zero crossing
STRONG_VALUE = 50
INTENSE_VALUE = 70

# (threshold, phase), checked top-down against the composite percentage
OVERALL_PHASES: tuple[tuple[int, str], ...] = (
    (80, "Peak"),
    (60, "High"),
    (40, "Neutral"),
    (20, "Low"),
)

OPTIMAL_COMPOSITE = 70

# (min compatibility, description, best activities), checked top-down
COMPATIBILITY_BANDS: tuple[tuple[int, str, list[str]], ...] = (
    (80, "Excellent alignment. Great day for collaboration and joint decisions.",
     ["Major partnership decisions", "Joint presentations", "Strategic planning sessions"]),
    (60, "Good alignment. Suitable for most collaborative activities.",
     ["Team meetings", "Brainstorming sessions", "Project planning"]),
    (40, "Moderate alignment. Focus on structured, agenda-driven interactions.",
     ["Status updates", "Routine check-ins", "Follow-up meetings"]),
    (0, "Low alignment. Consider rescheduling important joint decisions.",
     ["Independent work", "Email communication", "Preparation tasks"]),
)

_DESCRIPTIONS: dict[tuple[str, str], tuple[str, str]] = {
    # (cycle, phase): (intense, moderate)
    ("Physical", "High"): (
        "Peak physical energy and stamina. Excellent for demanding tasks.",
        "Good physical energy. Suitable for active work.",
    ),
    ("Physical", "Low"): (
        "Low physical energy. Prioritize rest and light activities.",
        "Moderate physical energy. Pace yourself.",
    ),
    ("Emotional", "High"): (
        "Peak emotional stability and optimism. Great for people-facing activities.",
        "Positive emotional state. Good for collaboration.",
    ),
    ("Emotional", "Low"): (
        "Emotionally sensitive period. Avoid high-stress situations.",
        "Moderate emotional energy. Be mindful of reactions.",
    ),
    ("Intellectual", "High"): (
        "Peak mental clarity and analytical ability. Ideal for complex decisions.",
        "Good mental focus. Suitable for problem-solving.",
    ),
    ("Intellectual", "Low"): (
        "Mental fatigue likely. Postpone critical thinking tasks.",
        "Moderate mental energy. Take breaks as needed.",
    ),
}

_GUIDANCE: dict[str, tuple[list[str], list[str]]] = {
    # cycle: (best_for when strongly high, avoid when low or critical)
    "Physical": (
        ["Long meetings and presentations", "Travel and site visits"],
        ["Physically demanding tasks", "Long travel"],
    ),
    "Emotional": (
        ["Client negotiations", "Team collaboration", "Conflict resolution"],
        ["Difficult conversations", "High-pressure negotiations"],
    ),
    "Intellectual": (
        ["Strategic planning", "Complex problem-solving", "Financial analysis"],
        ["Critical decisions", "Complex negotiations"],
    ),
}


@dataclass(frozen=True, slots=True)
class Cycle:
    name: str
    period: int
    value: int  # -100..100
    phase: str  # High | Low | Critical
    percentage: int  # 0..100
    description: str


def cycle_phase(value: int) -> str:
    if abs(value) < CRITICAL_BAND:
        return "Critical"
    return "High" if value > 0 else "Low"


def _describe(name: str, phase: str, value: int) -> str:
    if phase == "Critical":
        return f"{name} cycle is at a critical transition point. Exercise caution."
    intense, moderate = _DESCRIPTIONS[(name, phase)]
    return intense if abs(value) > INTENSE_VALUE else moderate


def compute_cycles(birth: date | datetime | str, target: date | datetime | str) -> list[Cycle]:
    days = (coerce_date(target) - coerce_date(birth)).days
    cycles = []
    for name, period in CYCLE_PERIODS.items():
        value = sine_cycle(days, period)
        phase = cycle_phase(value)
        cycles.append(Cycle(
            name=name,
            period=period,
            value=value,
            phase=phase,
            percentage=round_half_up((value + 100) / 2),
            description=_describe(name, phase, value),
        ))
    return cycles


def composite_percentage(cycles: list[Cycle]) -> int:
    return round_half_up(sum(c.percentage for c in cycles) / len(cycles))


def overall_phase(composite: int) -> str:
    for threshold, phase in OVERALL_PHASES:
        if composite >= threshold:
            return phase
    return "Critical"


def business_guidance(cycles: list[Cycle]) -> tuple[list[str], list[str]]:
    best_for: list[str] = []
    avoid: list[str] = []
    for cycle in cycles:
        good, bad = _GUIDANCE[cycle.name]
        if cycle.phase == "High" and cycle.value > STRONG_VALUE:
            best_for.extend(good)
        elif cycle.phase in ("Low", "Critical"):
            avoid.extend(bad)

    if all(c.value > STRONG_VALUE for c in cycles):
        best_for.extend(["Major launches and announcements", "Important presentations"])
    if sum(1 for c in cycles if c.phase == "Critical") >= 2:
        avoid.extend(["Any major commitments", "Risky decisions"])
    return best_for, avoid


def score_biorhythm(
    birth: date | datetime | str,
    target: date | datetime | str,
    location: BirthPlace | None = None,
) -> SubsystemResult:
    cycles = compute_cycles(birth, target)
    composite = composite_percentage(cycles)
    phase = overall_phase(composite)
    best_for, avoid = business_guidance(cycles)

    summary = ", ".join(f"{c.name} {c.phase.lower()}" for c in cycles)
    return SubsystemResult(
        name="biorhythm",
        score=clamp(composite),
        label=phase,
        facts=[f"Biorhythm {phase}: {summary}"] + [c.description for c in cycles],
        details={
            "cycles": {
                c.name.lower(): {"value": c.value, "phase": c.phase, "percentage": c.percentage}
                for c in cycles
            },
            "composite": composite,
            "overall_phase": phase,
            "best_for": best_for,
            "avoid": avoid,
        },
    )


# ---------------------------------------------------------------------------
# Ranges & compatibility
# ---------------------------------------------------------------------------


def biorhythm_day(birth: date | datetime | str, target: date | datetime | str) -> BiorhythmDay:
    cycles = compute_cycles(birth, target)
    composite = composite_percentage(cycles)
    return BiorhythmDay(
        date=coerce_date(target).isoformat(),
        cycles={
            c.name.lower(): CycleReading(value=c.value, phase=c.phase, percentage=c.percentage)
            for c in cycles
        },
        composite=composite,
        overall_phase=overall_phase(composite),
    )


def biorhythm_range(
    birth: date | datetime | str,
    start: date | datetime | str,
    days: int,
) -> list[BiorhythmDay]:
    """One BiorhythmDay per calendar day, starting at `start`."""
    first = coerce_date(start)
    return [biorhythm_day(birth, first + timedelta(days=i)) for i in range(max(days, 0))]


def optimal_days(
    birth: date | datetime | str,
    start: date | datetime | str,
    days: int,
    min_composite: int = OPTIMAL_COMPOSITE,
) -> list[str]:
    return [d.date for d in biorhythm_range(birth, start, days) if d.composite >= min_composite]


def critical_days(
    birth: date | datetime | str,
    start: date | datetime | str,
    days: int,
) -> list[str]:
    """Days on which at least two cycles sit at a zero crossing."""
    return [
        d.date
        for d in biorhythm_range(birth, start, days)
        if sum(1 for c in d.cycles.values() if c.phase == "Critical") >= 2
    ]


def biorhythm_compatibility(
    birth_a: date | datetime | str,
    birth_b: date | datetime | str,
    target: date | datetime | str,
) -> Compatibility:
    a = compute_cycles(birth_a, target)
    b = compute_cycles(birth_b, target)
    avg_diff = sum(abs(x.value - y.value) for x, y in zip(a, b)) / len(a)
    score = round_half_up(100 - avg_diff / 2)

    for threshold, description, activities in COMPATIBILITY_BANDS:
        if score >= threshold:
            break
    return Compatibility(
        compatibility=score,
        description=description,
        best_activities=list(activities),
    )
