"""Personalized adjustments — today's lifestyle logs as signed score deltas.

One handler per LogCategory. A category with no entries (or whose rule
yields nothing worth reporting) emits no adjustment at all.

Where a trusted (non-low) correlation exists for sleep, exercise or
meditation, the learned rule replaces the fixed band for that factor.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from app.energy.correlation import trusted
from app.energy.dates import coerce_date
from app.energy.errors import check_bounds
from app.energy.features import clamp, round_half_up
from app.energy.models import (
    Correlation,
    ExerciseEntry,
    LogCategory,
    LogEntry,
    LogsByCategory,
    MeditationEntry,
    PersonalizedAdjustment,
    SleepEntry,
    SocialEntry,
    WeatherEntry,
)

log = logging.getLogger(__name__)

OPTIMAL_SLEEP_HOURS = 8


def _num(value: float) -> str:
    return f"{value:g}"


def _on_day(entries: list[LogEntry], key: str) -> list[LogEntry]:
    return [e for e in entries if coerce_date(e.date).isoformat() == key]


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _sleep(
    entries: list[SleepEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    if not entries:
        return None
    sleep = entries[-1]
    hours = sleep.hours
    corr = learned.get("sleep_hours")

    if corr is not None:
        delta = round_half_up((hours - OPTIMAL_SLEEP_HOURS) * corr.impact / 2)
        description = f"You slept {_num(hours)} hours"
        recommendation = (
            "Try to get 7-8 hours of sleep for optimal energy" if hours < 7
            else "Great sleep! Keep it up"
        )
    elif hours >= 8:
        delta = 10
        description = f"You slept {_num(hours)} hours (excellent)"
        recommendation = "Your sleep is optimal - maintain this routine"
    elif hours >= 7:
        delta = 5
        description = f"You slept {_num(hours)} hours (good)"
        recommendation = "Good sleep, try for 8 hours for peak energy"
    elif hours >= 6:
        delta = 0
        description = f"You slept {_num(hours)} hours (adequate)"
        recommendation = "Add 1-2 more hours of sleep for better energy"
    else:
        delta = -10
        description = f"You slept only {_num(hours)} hours (insufficient)"
        recommendation = "Prioritize sleep tonight - aim for 8 hours"

    if sleep.quality == "excellent":
        delta += 5
        description += " with excellent quality"
    elif sleep.quality == "poor":
        delta -= 5
        description += " with poor quality"

    return PersonalizedAdjustment(
        factor="sleep", description=description, adjustment=delta, recommendation=recommendation
    )


def _meditation(
    entries: list[MeditationEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    if not entries:
        return None
    total = sum(e.duration for e in entries)
    corr = learned.get("meditation_duration")

    if corr is not None:
        if total <= 0:
            return None
        delta = round_half_up(min(total / 5, 8)) if corr.impact > 0 else 0
        recommendation = "Meditation enhances your energy. Great work!"
    else:
        if total >= 20:
            delta = 8
        elif total >= 10:
            delta = 5
        else:
            delta = 3
        recommendation = "Meditation boosts your mental clarity and energy"

    return PersonalizedAdjustment(
        factor="meditation",
        description=f"You meditated for {_num(total)} minutes",
        adjustment=delta,
        recommendation=recommendation,
    )


def _exercise(
    entries: list[ExerciseEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    if not entries:
        return None
    total = sum(e.duration for e in entries)
    corr = learned.get("exercise_duration")

    if corr is not None:
        if total <= 0:
            return None
        delta = round_half_up(min(total / 10, 10)) if corr.impact > 0 else 0
        recommendation = "Exercise boosts your energy. Keep moving!"
    else:
        intense = any(e.intensity == "intense" for e in entries)
        if intense and total >= 30:
            delta = 10
        elif total >= 30:
            delta = 7
        elif total >= 15:
            delta = 4
        else:
            delta = 0
        recommendation = "Physical activity boosts your energy and focus"

    return PersonalizedAdjustment(
        factor="exercise",
        description=f"You exercised for {_num(total)} minutes",
        adjustment=delta,
        recommendation=recommendation,
    )


_WEATHER: dict[str, tuple[int, str]] = {
    "sunny": (5, "Sunny weather boosts your mood and energy"),
    "rainy": (-3, "Rainy weather may lower your energy slightly"),
    "cloudy": (-2, "Cloudy weather may affect your mood"),
}


def _weather(
    entries: list[WeatherEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    if not entries:
        return None
    rule = _WEATHER.get(entries[-1].condition)
    if rule is None:
        return None
    delta, description = rule
    return PersonalizedAdjustment(
        factor="weather",
        description=description,
        adjustment=delta,
        recommendation=(
            "Take advantage of the good weather" if delta > 0
            else "Consider indoor activities or extra self-care"
        ),
    )


def _social(
    entries: list[SocialEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    energizing = sum(1 for e in entries if e.energy_impact == "energizing")
    draining = sum(1 for e in entries if e.energy_impact == "draining")
    delta = energizing * 3 - draining * 5
    if delta == 0:
        return None
    return PersonalizedAdjustment(
        factor="social",
        description=(
            f"{energizing} energizing social interactions" if energizing > draining
            else f"{draining} energy-draining interactions"
        ),
        adjustment=delta,
        recommendation=(
            "Limit draining interactions and prioritize energizing ones" if draining > 0
            else "Your social interactions are boosting your energy"
        ),
    )


def _no_adjustment(
    entries: list[LogEntry], learned: dict[str, Correlation]
) -> PersonalizedAdjustment | None:
    return None


# Each handler receives only its own category's entries.
Handler = Callable[..., PersonalizedAdjustment | None]

# Reporting order follows the dict order.
HANDLERS: dict[LogCategory, Handler] = {
    LogCategory.sleep: _sleep,
    LogCategory.meditation: _meditation,
    LogCategory.exercise: _exercise,
    LogCategory.weather: _weather,
    LogCategory.social: _social,
    LogCategory.nutrition: _no_adjustment,
    LogCategory.biometric: _no_adjustment,
}


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


def compute_adjustments(
    target: date | datetime | str,
    todays_logs: LogsByCategory,
    correlations: list[Correlation] | None = None,
) -> list[PersonalizedAdjustment]:
    """Adjustments for one day. Entries for other days are ignored."""
    key = coerce_date(target).isoformat()
    learned = trusted(correlations)
    adjustments: list[PersonalizedAdjustment] = []
    for category, handler in HANDLERS.items():
        entries = _on_day(todays_logs.get(category) or [], key)
        adjustment = handler(entries, learned)
        if adjustment is not None:
            adjustments.append(adjustment)
    log.debug("Adjustments for %s: %s", key, [(a.factor, a.adjustment) for a in adjustments])
    return adjustments


def total_adjustment(adjustments: list[PersonalizedAdjustment]) -> int:
    return sum(a.adjustment for a in adjustments)


def apply_adjustments(base_score: float, adjustments: list[PersonalizedAdjustment]) -> int:
    adjusted = round_half_up(clamp(base_score + total_adjustment(adjustments)))
    check_bounds(adjusted, "adjusted_score")
    return adjusted
