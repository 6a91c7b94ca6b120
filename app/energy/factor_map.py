"""
Correlation factor config.

Each factor reads one numeric field from one log category and folds a
day's entries into a single value:
  sleep_hours          sleep.hours          last
  exercise_duration    exercise.duration    sum
  meditation_duration  meditation.duration  sum
  social_duration      social.duration      sum
  nutrition_calories   nutrition.calories   sum
  weather_temperature  weather.temperature  last
  biometric_stress     biometric.stress_level  avg

A "sum" factor only counts a day whose total is positive.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.energy.models import LogCategory


@dataclass(frozen=True, slots=True)
class FactorConfig:
    category: LogCategory
    field: str
    agg: str
    unit: str | None = None


FACTOR_CONFIG: dict[str, FactorConfig] = {
    "sleep_hours": FactorConfig(category=LogCategory.sleep, field="hours", agg="last", unit="h"),
    "exercise_duration": FactorConfig(category=LogCategory.exercise, field="duration", agg="sum", unit="min"),
    "meditation_duration": FactorConfig(category=LogCategory.meditation, field="duration", agg="sum", unit="min"),
    "social_duration": FactorConfig(category=LogCategory.social, field="duration", agg="sum", unit="min"),
    "nutrition_calories": FactorConfig(category=LogCategory.nutrition, field="calories", agg="sum", unit="kcal"),
    "weather_temperature": FactorConfig(category=LogCategory.weather, field="temperature", agg="last", unit="C"),
    "biometric_stress": FactorConfig(category=LogCategory.biometric, field="stress_level", agg="avg"),
}


def get_factor_config(factor: str) -> FactorConfig | None:
    return FACTOR_CONFIG.get(factor)


def list_factors() -> list[str]:
    return list(FACTOR_CONFIG.keys())
