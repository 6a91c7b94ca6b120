"""Astrology scorer — simplified daily transits and business timing.

Planet positions are mean-motion approximations counted in whole days
since the Unix epoch. They are deterministic, not ephemeris-accurate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from app.energy.dates import coerce_date
from app.energy.features import angular_distance, clamp, mean, wrap_degrees
from app.energy.models import BirthPlace, SubsystemResult
from app.energy.zodiac import (
    ELEMENTS,
    MODALITIES,
    SIGN_INDEX,
    SIGNS,
    dominant,
    sign_for_day,
    sign_for_longitude,
)

UNIX_EPOCH = date(1970, 1, 1)
J2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)

MOON_DEGREES_PER_DAY = 13.176
MERCURY_PERIOD_DAYS = 88
VENUS_PERIOD_DAYS = 225
MARS_PERIOD_DAYS = 687
MERCURY_RETROGRADE_CYCLE = 120
MERCURY_RETROGRADE_DAYS = 21

ASPECT_ORB = 8.0
TIGHT_ORB = 3.0
BASELINE = 50

# (name, exact angle, influence)
ASPECTS: tuple[tuple[str, float, str], ...] = (
    ("conjunction", 0.0, "harmonious"),
    ("sextile", 60.0, "harmonious"),
    ("square", 90.0, "challenging"),
    ("trine", 120.0, "harmonious"),
    ("opposition", 180.0, "challenging"),
)


@dataclass(frozen=True, slots=True)
class PlanetPosition:
    planet: str
    sign: str
    degree: int  # 0–30 within sign; rounding can reach 30
    house: int  # 1–12
    retrograde: bool = False

    @property
    def longitude(self) -> float:
        return SIGN_INDEX[self.sign] * 30 + self.degree


@dataclass(frozen=True, slots=True)
class Aspect:
    planet1: str
    planet2: str
    aspect: str
    orb: float
    influence: str


# ---------------------------------------------------------------------------
# Planet positions
# ---------------------------------------------------------------------------


def _days_since_epoch(day: date) -> int:
    return (day - UNIX_EPOCH).days


def _orbital_position(planet: str, degrees: float, retrograde: bool = False) -> PlanetPosition:
    degrees = wrap_degrees(degrees)
    index = max(0, min(11, int(degrees // 30)))
    return PlanetPosition(
        planet=planet,
        sign=SIGNS[index].name,
        degree=round(degrees % 30),
        house=index + 1,
        retrograde=retrograde,
    )


def sun_position(day: date) -> PlanetPosition:
    day_of_year = day.timetuple().tm_yday
    degree = (day_of_year * 360 / 365) % 30
    return PlanetPosition("Sun", sign_for_day(day.month, day.day).name, round(degree), 1)


def planet_positions(target: date | datetime | str) -> list[PlanetPosition]:
    day = coerce_date(target)
    days = _days_since_epoch(day)
    retrograde = days % MERCURY_RETROGRADE_CYCLE < MERCURY_RETROGRADE_DAYS
    return [
        sun_position(day),
        _orbital_position("Moon", days * MOON_DEGREES_PER_DAY),
        _orbital_position("Mercury", days * 360 / MERCURY_PERIOD_DAYS, retrograde),
        _orbital_position("Venus", days * 360 / VENUS_PERIOD_DAYS),
        _orbital_position("Mars", days * 360 / MARS_PERIOD_DAYS),
    ]


def find_aspects(planets: list[PlanetPosition]) -> list[Aspect]:
    found: list[Aspect] = []
    for i, first in enumerate(planets):
        for second in planets[i + 1:]:
            distance = angular_distance(first.longitude, second.longitude)
            for name, angle, influence in ASPECTS:
                orb = abs(distance - angle)
                if orb <= ASPECT_ORB:
                    found.append(Aspect(first.planet, second.planet, name, orb, influence))
                    break
    return found


# ---------------------------------------------------------------------------
# Business timing
# ---------------------------------------------------------------------------


def business_impact(planets: list[PlanetPosition], aspects: list[Aspect]) -> dict[str, float]:
    impact = {"meetings": BASELINE, "decisions": BASELINE, "negotiations": BASELINE, "launches": BASELINE}
    by_name = {p.planet: p for p in planets}

    mercury = by_name.get("Mercury")
    if mercury is not None:
        if mercury.retrograde:
            impact["meetings"] -= 20
            impact["negotiations"] -= 15
        elif mercury.sign in ("Gemini", "Virgo"):
            impact["meetings"] += 15
            impact["negotiations"] += 10

    venus = by_name.get("Venus")
    if venus is not None and venus.sign in ("Libra", "Taurus"):
        impact["negotiations"] += 15

    mars = by_name.get("Mars")
    if mars is not None and mars.sign in ("Aries", "Scorpio"):
        impact["launches"] += 20
        impact["decisions"] += 10

    sun = by_name.get("Sun")
    if sun is not None and sun.sign in ("Leo", "Aries"):
        impact["decisions"] += 15
        impact["launches"] += 10

    for aspect in aspects:
        delta = 5 if aspect.influence == "harmonious" else -5
        for key in impact:
            impact[key] += delta

    return {key: clamp(value) for key, value in impact.items()}


def best_and_avoid_hours(planets: list[PlanetPosition], aspects: list[Aspect]) -> tuple[list[str], list[str]]:
    by_name = {p.planet: p for p in planets}
    moon = by_name["Moon"]

    if moon.house <= 4:
        best = ["9:00 AM - 12:00 PM"]
    elif moon.house <= 8:
        best = ["2:00 PM - 5:00 PM"]
    else:
        best = ["7:00 PM - 9:00 PM"]

    avoid: list[str] = []
    if by_name["Mercury"].retrograde:
        avoid.append("12:00 PM - 2:00 PM")
    if any(a.influence == "challenging" and a.orb < TIGHT_ORB for a in aspects):
        avoid.append("5:00 PM - 7:00 PM")
    return best, avoid


# ---------------------------------------------------------------------------
# Natal chart
# ---------------------------------------------------------------------------


def natal_signs(birth: date | datetime | str, location: BirthPlace | None = None) -> dict[str, str]:
    """Sun, moon and rising sign at birth, read at 12:00 UTC.

    With a birth place the moon uses its J2000 mean longitude and the
    rising sign a crude local sidereal time. Without one both fall back
    to month offsets from the sun sign.
    """
    born = coerce_date(birth)
    sun = sign_for_day(born.month, born.day)

    if location is None:
        moon = sign_for_day((born.month + 4) % 12 or 12, min(born.day, 28))
        rising = sign_for_day((born.month + 2) % 12 or 12, min(born.day, 28))
    else:
        noon = datetime.combine(born, time(12, 0), tzinfo=timezone.utc)
        days_since_j2000 = (noon - J2000).total_seconds() / 86400.0
        moon_longitude = wrap_degrees(218.316 + 13.176396 * days_since_j2000)
        moon = sign_for_longitude(moon_longitude + location.longitude / 15)
        hours = noon.hour + location.longitude / 15
        rising = sign_for_longitude(wrap_degrees(hours * 15))

    return {"sun_sign": sun.name, "moon_sign": moon.name, "rising_sign": rising.name}


def dominant_element(planets: list[PlanetPosition]) -> str:
    elements = [SIGNS[SIGN_INDEX[p.sign]].element for p in planets]
    return dominant(elements, ELEMENTS)


def dominant_modality(planets: list[PlanetPosition]) -> str:
    modalities = [SIGNS[SIGN_INDEX[p.sign]].modality for p in planets]
    return dominant(modalities, MODALITIES)


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------


def score_astrology(
    birth: date | datetime | str,
    target: date | datetime | str,
    location: BirthPlace | None = None,
) -> SubsystemResult:
    planets = planet_positions(target)
    aspects = find_aspects(planets)
    impact = business_impact(planets, aspects)
    best, avoid = best_and_avoid_hours(planets, aspects)
    natal = natal_signs(birth, location)

    by_name = {p.planet: p for p in planets}
    moon_sign = by_name["Moon"].sign
    harmonious = sum(1 for a in aspects if a.influence == "harmonious")
    challenging = len(aspects) - harmonious

    if by_name["Mercury"].retrograde:
        headline = f"Mercury retrograde with Moon in {moon_sign} - double-check communications"
    else:
        headline = (
            f"Moon in {moon_sign} with {harmonious} harmonious and "
            f"{challenging} challenging aspects"
        )

    return SubsystemResult(
        name="astrology",
        score=clamp(mean(list(impact.values()))),
        label=f"Moon in {moon_sign}",
        facts=[
            headline,
            f"Sun sign {natal['sun_sign']}, Moon sign {natal['moon_sign']}, "
            f"Rising {natal['rising_sign']}",
        ],
        details={
            **natal,
            "transit_moon_sign": moon_sign,
            "mercury_retrograde": by_name["Mercury"].retrograde,
            "business_impact": impact,
            "aspects": [
                {"planets": [a.planet1, a.planet2], "aspect": a.aspect, "orb": round(a.orb, 2),
                 "influence": a.influence}
                for a in aspects
            ],
            "best_hours": best,
            "avoid_hours": avoid,
            "dominant_element": dominant_element(planets),
            "dominant_modality": dominant_modality(planets),
        },
    )
