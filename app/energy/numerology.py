"""Life Path and Personal Day numerology."""

from __future__ import annotations

from datetime import date, datetime

from app.energy.dates import coerce_date
from app.energy.features import clamp
from app.energy.models import BirthPlace, SubsystemResult

PERSONAL_DAY_MEANINGS: dict[int, str] = {
    1: "New beginnings and fresh starts - great for initiating projects",
    2: "Cooperation and partnerships - focus on teamwork and relationships",
    3: "Creativity and self-expression - perfect for creative work",
    4: "Structure and organization - ideal for planning and building foundations",
    5: "Change and freedom - embrace new opportunities and flexibility",
    6: "Responsibility and service - focus on helping others and nurturing",
    7: "Reflection and spirituality - time for deep thinking and analysis",
    8: "Power and achievement - excellent for business and major decisions",
    9: "Completion and wisdom - wrap up projects and share knowledge",
}

# Outward-facing days score higher than reflective ones.
PERSONAL_DAY_SCORES: dict[int, int] = {
    1: 85,
    2: 65,
    3: 80,
    4: 60,
    5: 75,
    6: 70,
    7: 55,
    8: 90,
    9: 65,
}

RESONANCE_BONUS = 5  # Personal Day equals Life Path


def reduce_to_single_digit(value: int) -> int:
    """Sum decimal digits until the value is 1–9. 11/22/33 are not kept."""
    value = abs(int(value))
    while value > 9:
        value = sum(int(digit) for digit in str(value))
    return value


def life_path_number(birth: date | datetime | str) -> int:
    born = coerce_date(birth)
    total = (
        reduce_to_single_digit(born.day)
        + reduce_to_single_digit(born.month)
        + reduce_to_single_digit(born.year)
    )
    return reduce_to_single_digit(total)


def personal_day_number(target: date | datetime | str) -> int:
    day = coerce_date(target)
    return reduce_to_single_digit(day.day + day.month + day.year)


def personal_year_number(birth: date | datetime | str, year: int) -> int:
    born = coerce_date(birth)
    return reduce_to_single_digit(born.day + born.month + year)


def score_numerology(
    birth: date | datetime | str,
    target: date | datetime | str,
    location: BirthPlace | None = None,
) -> SubsystemResult:
    life_path = life_path_number(birth)
    day = coerce_date(target)
    personal_day = personal_day_number(day)
    personal_year = personal_year_number(birth, day.year)

    score = PERSONAL_DAY_SCORES[personal_day]
    if personal_day == life_path:
        score += RESONANCE_BONUS

    return SubsystemResult(
        name="numerology",
        score=clamp(score),
        label=f"Personal Day {personal_day}",
        facts=[
            f"Personal Day {personal_day}: {PERSONAL_DAY_MEANINGS[personal_day]}",
            f"Life Path {life_path}",
            f"Personal Year {personal_year}",
        ],
        details={
            "life_path": life_path,
            "personal_day": personal_day,
            "personal_year": personal_year,
        },
    )
