"""Tests for personalized adjustments."""

from typing import get_args, get_type_hints

import pytest

from app.energy.adjustments import (
    HANDLERS,
    apply_adjustments,
    compute_adjustments,
    total_adjustment,
)
from app.energy.errors import ClampViolation
from app.energy.models import (
    BiometricEntry,
    Correlation,
    ExerciseEntry,
    LogCategory,
    MeditationEntry,
    NutritionEntry,
    PersonalizedAdjustment,
    SleepEntry,
    SocialEntry,
    WeatherEntry,
)

DAY = "2024-06-01"


def _only(category, *entries):
    return compute_adjustments(DAY, {category: list(entries)})


def _corr(factor: str, confidence: str = "medium", impact: float = 2.0) -> Correlation:
    return Correlation(factor=factor, strength=0.6, impact=impact, sample_size=12, confidence=confidence)


def _adj(value: int) -> PersonalizedAdjustment:
    return PersonalizedAdjustment(factor="x", description="", adjustment=value)


class TestSleep:
    def test_excellent_long_sleep(self):
        [adj] = _only(LogCategory.sleep, SleepEntry(date=DAY, hours=8.5, quality="excellent"))
        assert adj.factor == "sleep"
        assert adj.adjustment == 15
        assert adj.description == "You slept 8.5 hours (excellent) with excellent quality"

    @pytest.mark.parametrize("hours,quality,expected", [
        (7.5, "good", 5),
        (6.0, "fair", 0),
        (5.0, "poor", -15),
        (7.0, "poor", 0),
    ])
    def test_bands(self, hours, quality, expected):
        [adj] = _only(LogCategory.sleep, SleepEntry(date=DAY, hours=hours, quality=quality))
        assert adj.adjustment == expected

    def test_learned_rule_replaces_band(self):
        entry = SleepEntry(date=DAY, hours=6, quality="good")
        [adj] = compute_adjustments(DAY, {LogCategory.sleep: [entry]}, [_corr("sleep_hours", impact=4.0)])
        # (6 - 8) * 4 / 2
        assert adj.adjustment == -4

    def test_low_confidence_correlation_ignored(self):
        entry = SleepEntry(date=DAY, hours=6, quality="good")
        [adj] = compute_adjustments(
            DAY, {LogCategory.sleep: [entry]}, [_corr("sleep_hours", confidence="low", impact=4.0)]
        )
        assert adj.adjustment == 0
        assert "(adequate)" in adj.description


class TestMeditation:
    @pytest.mark.parametrize("minutes,expected", [(25, 8), (20, 8), (12, 5), (5, 3)])
    def test_bands(self, minutes, expected):
        [adj] = _only(LogCategory.meditation, MeditationEntry(date=DAY, duration=minutes))
        assert adj.adjustment == expected

    def test_sessions_are_summed(self):
        [adj] = _only(
            LogCategory.meditation,
            MeditationEntry(date=DAY, duration=10),
            MeditationEntry(date=DAY, duration=10),
        )
        assert adj.adjustment == 8
        assert adj.description == "You meditated for 20 minutes"

    def test_learned_rule(self):
        entry = MeditationEntry(date=DAY, duration=25)
        [adj] = compute_adjustments(DAY, {LogCategory.meditation: [entry]}, [_corr("meditation_duration")])
        assert adj.adjustment == 5


class TestExercise:
    @pytest.mark.parametrize("minutes,intensity,expected", [
        (45, "intense", 10),
        (45, "moderate", 7),
        (20, "intense", 4),
        (10, "light", 0),
    ])
    def test_bands(self, minutes, intensity, expected):
        [adj] = _only(LogCategory.exercise, ExerciseEntry(date=DAY, duration=minutes, intensity=intensity))
        assert adj.adjustment == expected

    def test_learned_rule_positive_impact(self):
        entry = ExerciseEntry(date=DAY, duration=45)
        [adj] = compute_adjustments(DAY, {LogCategory.exercise: [entry]}, [_corr("exercise_duration")])
        # min(45 / 10, 10) = 4.5 -> 5
        assert adj.adjustment == 5

    def test_learned_rule_negative_impact(self):
        entry = ExerciseEntry(date=DAY, duration=45)
        [adj] = compute_adjustments(
            DAY, {LogCategory.exercise: [entry]}, [_corr("exercise_duration", impact=-1.0)]
        )
        assert adj.adjustment == 0


class TestWeatherAndSocial:
    @pytest.mark.parametrize("condition,expected", [("sunny", 5), ("cloudy", -2), ("rainy", -3)])
    def test_weather(self, condition, expected):
        [adj] = _only(LogCategory.weather, WeatherEntry(date=DAY, condition=condition, temperature=20))
        assert adj.adjustment == expected

    def test_other_weather_emits_nothing(self):
        assert _only(LogCategory.weather, WeatherEntry(date=DAY, condition="foggy", temperature=10)) == []

    def test_social_net(self):
        [adj] = _only(
            LogCategory.social,
            SocialEntry(date=DAY, energy_impact="energizing"),
            SocialEntry(date=DAY, energy_impact="energizing"),
            SocialEntry(date=DAY, energy_impact="draining"),
        )
        assert adj.adjustment == 1
        assert adj.description == "2 energizing social interactions"

    def test_social_neutral_emits_nothing(self):
        assert _only(LogCategory.social, SocialEntry(date=DAY, energy_impact="neutral")) == []


class TestComputeAdjustments:
    def test_no_logs_no_adjustments(self):
        assert compute_adjustments(DAY, {}) == []

    def test_nutrition_and_biometric_ignored(self):
        logs = {
            LogCategory.nutrition: [NutritionEntry(date=DAY, meal_type="lunch", calories=600)],
            LogCategory.biometric: [BiometricEntry(date=DAY, stress_level=80)],
        }
        assert compute_adjustments(DAY, logs) == []

    def test_other_days_ignored(self):
        logs = {LogCategory.sleep: [SleepEntry(date="2024-05-31", hours=9)]}
        assert compute_adjustments(DAY, logs) == []

    def test_order_and_total(self):
        logs = {
            LogCategory.weather: [WeatherEntry(date=DAY, condition="sunny", temperature=25)],
            LogCategory.sleep: [SleepEntry(date=DAY, hours=8)],
        }
        adjustments = compute_adjustments(DAY, logs)
        assert [a.factor for a in adjustments] == ["sleep", "weather"]
        assert total_adjustment(adjustments) == 15


class TestApplyAdjustments:
    def test_clamped_high(self):
        assert apply_adjustments(95, [_adj(30)]) == 100

    def test_clamped_low(self):
        assert apply_adjustments(5, [_adj(-30)]) == 0

    def test_plain_sum(self):
        assert apply_adjustments(60, [_adj(5), _adj(-2)]) == 63

    def test_clamp_violation_is_assertion(self):
        assert issubclass(ClampViolation, AssertionError)


class TestHandlerTypes:
    SCORED = (
        LogCategory.sleep,
        LogCategory.meditation,
        LogCategory.exercise,
        LogCategory.weather,
        LogCategory.social,
    )

    def test_every_category_has_a_handler(self):
        assert set(HANDLERS) == set(LogCategory)

    @pytest.mark.parametrize("category", SCORED)
    def test_handler_takes_its_own_entry_type(self, category):
        hint = get_type_hints(HANDLERS[category])["entries"]
        (entry_type,) = get_args(hint)
        assert entry_type.model_fields["category"].default == category.value
