"""Tests for the lunar phase scorer."""

from datetime import date, timedelta

from app.energy.lunar import (
    PHASES,
    lunar_multiplier,
    moon_phase_fraction,
    next_significant_phase,
    phase_for_fraction,
    score_lunar,
    sleep_moon_correlation,
)
from app.energy.models import SleepEntry

# Life Path 3 (not lunar-sensitive) and Life Path 6 (sensitive)
PLAIN_BIRTH = "1990-05-15"
SENSITIVE_BIRTH = "1990-01-04"  # 4 + 1 + 1 = 6


def _phase(name: str):
    return next(p for p in PHASES if p.name == name)


class TestPhase:
    def test_fraction_in_unit_interval(self):
        day = date(2020, 1, 1)
        for offset in range(0, 400, 7):
            assert 0.0 <= moon_phase_fraction(day + timedelta(days=offset)) < 1.0

    def test_reference_new_moon_is_new(self):
        # Next UTC midnight after the reference new moon
        assert phase_for_fraction(moon_phase_fraction(date(2000, 1, 7))).name == "New Moon"

    def test_half_cycle_is_full(self):
        assert phase_for_fraction(0.5).name == "Full Moon"

    def test_wraparound_is_new(self):
        assert phase_for_fraction(0.97).name == "New Moon"

    def test_eight_phases(self):
        names = {phase_for_fraction(i / 16 + 0.01).name for i in range(16)}
        assert len(names) == 8


class TestMultiplier:
    def test_sensitive_on_strong_phase(self):
        assert lunar_multiplier(_phase("Full Moon"), 7) == 2.0
        assert lunar_multiplier(_phase("New Moon"), 6) == 2.0

    def test_not_sensitive(self):
        assert lunar_multiplier(_phase("Full Moon"), 3) == 1.0

    def test_weak_phase(self):
        assert lunar_multiplier(_phase("First Quarter"), 7) == 1.0


class TestScoreLunar:
    def test_plain_score_is_phase_influence(self):
        result = score_lunar(PLAIN_BIRTH, "2024-06-01")
        phase = _phase(result.label)
        assert result.score == phase.influence
        assert result.details["multiplier"] == 1.0

    def test_sensitive_full_moon_doubles_deviation(self):
        day = date(2024, 1, 1)
        while phase_for_fraction(moon_phase_fraction(day)).name != "Full Moon":
            day += timedelta(days=1)
        result = score_lunar(SENSITIVE_BIRTH, day)
        # 50 + (95 - 50) * 2 = 140 -> clamped
        assert result.score == 100
        assert "2x impact" in result.facts[0]

    def test_sensitive_new_moon(self):
        day = date(2024, 1, 1)
        while phase_for_fraction(moon_phase_fraction(day)).name != "New Moon":
            day += timedelta(days=1)
        result = score_lunar(SENSITIVE_BIRTH, day)
        assert result.score == 50 + (70 - 50) * 2

    def test_bounded_and_deterministic(self):
        day = date(2023, 1, 1)
        for offset in range(0, 120, 3):
            target = day + timedelta(days=offset)
            a = score_lunar(SENSITIVE_BIRTH, target)
            assert a == score_lunar(SENSITIVE_BIRTH, target)
            assert 0 <= a.score <= 100


def _days_where(predicate, count: int, start: date = date(2024, 1, 1)) -> list[date]:
    found = []
    day = start
    while len(found) < count:
        if predicate(moon_phase_fraction(day)):
            found.append(day)
        day += timedelta(days=1)
    return found


def _full(f: float) -> bool:
    return 0.45 <= f <= 0.55


def _new(f: float) -> bool:
    return f <= 0.05 or f >= 0.95


class TestNextSignificantPhase:
    def test_after_full_moon_comes_last_quarter(self):
        (day,) = _days_where(lambda f: 0.52 < f < 0.72, 1)
        result = next_significant_phase(day)
        assert result.phase == "Last Quarter"
        assert 1 <= result.days_until <= 8

    def test_late_waning_crescent_comes_new_moon(self):
        (day,) = _days_where(lambda f: 0.77 < f < 0.97, 1)
        assert next_significant_phase(day).phase == "New Moon"

    def test_date_is_days_until_ahead(self):
        day = date(2024, 6, 1)
        result = next_significant_phase(day)
        ahead = (date.fromisoformat(result.date) - day).days
        assert ahead in (result.days_until - 1, result.days_until)

    def test_never_more_than_a_quarter_away(self):
        for offset in range(0, 60, 3):
            assert 0 <= next_significant_phase(date(2024, 1, 1) + timedelta(days=offset)).days_until <= 8


class TestSleepMoonCorrelation:
    def test_better_sleep_at_full_moon(self):
        entries = [SleepEntry(date=d, hours=8, quality="excellent") for d in _days_where(_full, 3)]
        entries += [SleepEntry(date=d, hours=6, quality="poor") for d in _days_where(_new, 3)]
        result = sleep_moon_correlation(entries)
        assert result.correlation == "positive"
        assert result.full_moon_avg == 4.0
        assert result.new_moon_avg == 1.0
        assert result.insight.startswith("You sleep 300% better during full moons")

    def test_better_sleep_at_new_moon(self):
        entries = [SleepEntry(date=d, hours=6, quality="fair") for d in _days_where(_full, 3)]
        entries += [SleepEntry(date=d, hours=8, quality="excellent") for d in _days_where(_new, 4)]
        result = sleep_moon_correlation(entries)
        assert result.correlation == "negative"
        assert "better during new moons" in result.insight

    def test_small_difference_is_neutral(self):
        entries = [SleepEntry(date=d, hours=7, quality="good") for d in _days_where(_full, 3)]
        entries += [SleepEntry(date=d, hours=7, quality="good") for d in _days_where(_new, 3)]
        result = sleep_moon_correlation(entries)
        assert result.correlation == "neutral"
        assert result.insight.startswith("Moon phases don't")

    def test_not_enough_nights(self):
        entries = [SleepEntry(date=d, hours=8, quality="excellent") for d in _days_where(_full, 2)]
        result = sleep_moon_correlation(entries)
        assert result.correlation == "neutral"
        assert result.insight == "Not enough data to determine lunar correlation."
        assert result.new_moon_avg == 0.0

    def test_other_phases_ignored(self):
        entries = [SleepEntry(date=d, hours=8, quality="excellent")
                   for d in _days_where(lambda f: 0.2 < f < 0.3, 5)]
        result = sleep_moon_correlation(entries)
        assert result.full_moon_avg == 0.0
        assert result.new_moon_avg == 0.0
