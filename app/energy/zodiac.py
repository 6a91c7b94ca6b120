"""Zodiac sign table and lookups."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ZodiacSign:
    name: str
    start: tuple[int, int]  # (month, day) inclusive
    end: tuple[int, int]  # (month, day) inclusive
    element: str  # Fire | Earth | Air | Water
    modality: str  # Cardinal | Fixed | Mutable


# Index order matches ecliptic longitude: sign i covers [30·i, 30·i + 30).
SIGNS: tuple[ZodiacSign, ...] = (
    ZodiacSign("Aries", (3, 21), (4, 19), "Fire", "Cardinal"),
    ZodiacSign("Taurus", (4, 20), (5, 20), "Earth", "Fixed"),
    ZodiacSign("Gemini", (5, 21), (6, 20), "Air", "Mutable"),
    ZodiacSign("Cancer", (6, 21), (7, 22), "Water", "Cardinal"),
    ZodiacSign("Leo", (7, 23), (8, 22), "Fire", "Fixed"),
    ZodiacSign("Virgo", (8, 23), (9, 22), "Earth", "Mutable"),
    ZodiacSign("Libra", (9, 23), (10, 22), "Air", "Cardinal"),
    ZodiacSign("Scorpio", (10, 23), (11, 21), "Water", "Fixed"),
    ZodiacSign("Sagittarius", (11, 22), (12, 21), "Fire", "Mutable"),
    ZodiacSign("Capricorn", (12, 22), (1, 19), "Earth", "Cardinal"),
    ZodiacSign("Aquarius", (1, 20), (2, 18), "Air", "Fixed"),
    ZodiacSign("Pisces", (2, 19), (3, 20), "Water", "Mutable"),
)

SIGN_INDEX: dict[str, int] = {sign.name: i for i, sign in enumerate(SIGNS)}

ELEMENTS = ("Fire", "Earth", "Air", "Water")
MODALITIES = ("Cardinal", "Fixed", "Mutable")


def sign_for_day(month: int, day: int) -> ZodiacSign:
    """Tropical sun sign for a calendar month/day."""
    for sign in SIGNS:
        start_month, start_day = sign.start
        end_month, end_day = sign.end
        if month == start_month and day >= start_day:
            return sign
        if month == end_month and day <= end_day:
            return sign
    raise ValueError(f"Invalid month/day: {month}/{day}")


def sign_for_longitude(longitude: float) -> ZodiacSign:
    index = int(longitude % 360.0 // 30)
    return SIGNS[max(0, min(11, index))]


def dominant(values: list[str], order: tuple[str, ...]) -> str:
    """Most frequent value; ties resolve by table order."""
    counts = Counter(values)
    return max(order, key=lambda item: (counts[item], -order.index(item)))
