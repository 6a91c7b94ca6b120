"""Turns scores into explanations and advice.

Deterministic templates only. No model calls, no randomness.
"""

from __future__ import annotations

from app.energy.models import (
    Explanations,
    Insight,
    PersonalizedAdjustment,
    Prediction,
    Recommendations,
    SubsystemResult,
)

DEFAULT_BEST_TIME = "2-5pm"

# Reporting order for the spiritual explanations.
SPIRITUAL_ORDER = ("numerology", "lunar", "astrology", "biorhythm")

PERSONALITY_TYPES: dict[int, str] = {
    1: "Life Path 1-2 (Slow Starter / Light Switch)",
    2: "Life Path 1-2 (Slow Starter / Light Switch)",
    3: "Life Path 3-5 (Balanced / Adaptable)",
    4: "Life Path 3-5 (Balanced / Adaptable)",
    5: "Life Path 3-5 (Balanced / Adaptable)",
    6: "Life Path 6-7 (Spiritual / Intuitive)",
    7: "Life Path 6-7 (Spiritual / Intuitive)",
    8: "Life Path 8-9 (Logical / Results-Driven)",
    9: "Life Path 8-9 (Logical / Results-Driven)",
}

PERSONALITY_TRAITS: dict[int, list[str]] = {
    1: [
        "Takes time to get going in the morning",
        "Better energy in afternoon/evening",
        "Needs warm-up period for important tasks",
        "Independent and pioneering spirit",
    ],
    2: [
        "Takes time to get going in the morning",
        "Better energy in afternoon/evening",
        "Sensitive to environment and people",
        "Diplomatic and cooperative",
    ],
    3: [
        "Steady energy throughout the day",
        "Creative and expressive",
        "Adaptable to different situations",
        "Social and communicative",
    ],
    4: [
        "Practical and organized",
        "Steady, reliable energy",
        "Works well with structure",
        "Detail-oriented",
    ],
    5: [
        "Dynamic and versatile energy",
        "Thrives on variety and change",
        "Adaptable and freedom-loving",
        "Adventurous spirit",
    ],
    6: [
        "Deep thinker and emotionally sensitive",
        "Strong intuition and spiritual connection",
        "Lunar phases have 2x impact on your energy",
        "Nurturing and responsible",
    ],
    7: [
        "Highly intuitive and analytical",
        "Deeply affected by lunar cycles",
        "Needs quiet time for reflection",
        "Seeks deeper meaning and truth",
    ],
    8: [
        "Results-driven and ambitious",
        "Less affected by emotions, more by logic",
        "Strong leadership energy",
        "Focused on achievement and success",
    ],
    9: [
        "Humanitarian and idealistic",
        "Less affected by lunar phases",
        "Wise and compassionate",
        "Focused on bigger picture",
    ],
}

# (min score, success rate, confidence, reasoning), checked top-down
PREDICTIONS: tuple[tuple[int, int, str, str], ...] = (
    (85, 90, "high",
     "Based on your energy score and spiritual alignment, you're in your top 10% of days. "
     "Historical data shows 90% success rate on days like this."),
    (70, 75, "high",
     "Your energy is strong and well-aligned. "
     "You typically have 75% success rate on days with this score."),
    (55, 60, "medium",
     "Moderate energy day. Focus on steady progress rather than major breakthroughs."),
    (0, 40, "medium",
     "Energy is lower today. Consider this a planning and preparation day rather than execution."),
)


def personality_type(life_path: int | None) -> str:
    if life_path is None:
        return ""
    return PERSONALITY_TYPES.get(life_path, f"Life Path {life_path}")


def personality_traits(life_path: int | None) -> list[str]:
    if life_path is None:
        return []
    return list(PERSONALITY_TRAITS.get(life_path, ["Unique personality type"]))


def spiritual_explanations(subsystems: dict[str, SubsystemResult]) -> list[str]:
    names = [n for n in SPIRITUAL_ORDER if n in subsystems]
    names += [n for n in subsystems if n not in SPIRITUAL_ORDER]
    return [subsystems[n].facts[0] for n in names if subsystems[n].facts]


def recommendations(
    score: int,
    adjustments: list[PersonalizedAdjustment],
    kind: str,
    best_time: str = DEFAULT_BEST_TIME,
) -> Recommendations:
    do: list[str] = []
    avoid: list[str] = []

    if score >= 80:
        do += [
            "Schedule important negotiations or major decisions",
            "Tackle your most challenging tasks",
            "Trust your intuition on big opportunities",
        ]
        if "6-7" in kind:
            do.append("Your intuition is exceptionally strong today - use it for strategic planning")
    elif score >= 60:
        do += [
            "Focus on steady progress and routine tasks",
            "Good day for meetings and collaboration",
            "Build momentum for upcoming projects",
        ]
    else:
        do += [
            "Focus on planning and preparation",
            "Delegate when possible",
            "Conserve energy for tomorrow",
        ]
        avoid.append("Avoid major decisions or negotiations")

    for adj in adjustments:
        if not adj.recommendation:
            continue
        (do if adj.adjustment > 0 else avoid).append(adj.recommendation)

    return Recommendations(do=do, avoid=avoid, best_time=best_time)


def predict(score: int) -> Prediction:
    for threshold, rate, confidence, reasoning in PREDICTIONS:
        if score >= threshold:
            return Prediction(success_rate=rate, confidence=confidence, reasoning=reasoning)
    _, rate, confidence, reasoning = PREDICTIONS[-1]
    return Prediction(success_rate=rate, confidence=confidence, reasoning=reasoning)


def _best_time(subsystems: dict[str, SubsystemResult]) -> str:
    astrology = subsystems.get("astrology")
    if astrology is None:
        return DEFAULT_BEST_TIME
    hours = astrology.details.get("best_hours") or []
    return hours[0] if hours else DEFAULT_BEST_TIME


def interpret(
    adjusted_score: int,
    subsystems: dict[str, SubsystemResult],
    adjustments: list[PersonalizedAdjustment],
    kind: str,
    base_score: int | None = None,
    life_path: int | None = None,
) -> Insight:
    """Build the user-facing insight for one reading."""
    total = sum(a.adjustment for a in adjustments)
    prediction = predict(adjusted_score)
    return Insight(
        energy_score=adjusted_score,
        base_score=base_score if base_score is not None else adjusted_score,
        total_adjustment=total,
        why=Explanations(
            spiritual=spiritual_explanations(subsystems),
            personal=[a.description for a in adjustments],
        ),
        recommendations=recommendations(adjusted_score, adjustments, kind, _best_time(subsystems)),
        prediction=prediction,
        personality_type=kind,
        personality_traits=personality_traits(life_path),
    )
