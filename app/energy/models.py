"""Energy kernel contract — Pydantic v2 models."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.energy.dates import normalize_date_string


class LogCategory(str, Enum):
    sleep = "sleep"
    exercise = "exercise"
    meditation = "meditation"
    nutrition = "nutrition"
    social = "social"
    weather = "weather"
    biometric = "biometric"


# One entry per date; a new save replaces the old one.
UPSERT_CATEGORIES = frozenset({LogCategory.sleep, LogCategory.weather, LogCategory.biometric})


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class BirthPlace(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    date_of_birth: str
    place_of_birth: BirthPlace | None = None


# ---------------------------------------------------------------------------
# Lifestyle log entries (tagged union on `category`)
# ---------------------------------------------------------------------------


class _LogEntry(BaseModel):
    date: str

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> str:
        if hasattr(value, "isoformat") and not isinstance(value, str):
            value = value.isoformat()
        return normalize_date_string(value)


class SleepEntry(_LogEntry):
    category: Literal["sleep"] = "sleep"
    hours: float = Field(ge=0, le=24)
    quality: Literal["excellent", "good", "fair", "poor"] = "good"
    dreams: str | None = None
    notes: str | None = None


class ExerciseEntry(_LogEntry):
    category: Literal["exercise"] = "exercise"
    type: Literal["cardio", "strength", "yoga", "walking", "sports", "other"] = "other"
    duration: float = Field(ge=0)  # minutes
    intensity: Literal["light", "moderate", "intense"] = "moderate"
    feeling: str | None = None


class MeditationEntry(_LogEntry):
    category: Literal["meditation"] = "meditation"
    duration: float = Field(ge=0)  # minutes
    type: Literal["guided", "silent", "breathing", "visualization", "body-scan"] = "silent"
    feeling: str | None = None


class NutritionEntry(_LogEntry):
    category: Literal["nutrition"] = "nutrition"
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"]
    foods: str = ""
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    feeling: str | None = None


class SocialEntry(_LogEntry):
    category: Literal["social"] = "social"
    type: str = "other"  # "meeting" | "coffee" | "call" | "party" | ...
    duration: float = Field(default=0, ge=0)  # minutes
    people: list[str] = Field(default_factory=list)
    energy_impact: Literal["energizing", "neutral", "draining"] = "neutral"
    notes: str | None = None


class WeatherEntry(_LogEntry):
    category: Literal["weather"] = "weather"
    condition: Literal["sunny", "cloudy", "rainy", "stormy", "snowy", "foggy"]
    temperature: float  # celsius
    humidity: float | None = None


class BiometricEntry(_LogEntry):
    category: Literal["biometric"] = "biometric"
    heart_rate: float | None = None
    hrv: float | None = None
    stress_level: float | None = Field(default=None, ge=0, le=100)
    blood_pressure: str | None = None  # "120/80"


LogEntry = Union[
    SleepEntry,
    ExerciseEntry,
    MeditationEntry,
    NutritionEntry,
    SocialEntry,
    WeatherEntry,
    BiometricEntry,
]

LifestyleLogEntry = Annotated[LogEntry, Field(discriminator="category")]

LogsByCategory = dict[LogCategory, list[LogEntry]]


# ---------------------------------------------------------------------------
# Subsystems & composite
# ---------------------------------------------------------------------------


class Diagnostic(BaseModel):
    kind: str  # "subsystem_failure" | "insufficient_data"
    source: str
    message: str = ""


class SubsystemResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    score: float | None = None  # 0–100
    label: str = ""
    facts: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)


class CompositeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    base_score: int
    energy_type: str
    energy_description: str = ""
    dominant_influence: str | None = None
    confidence_score: int = 0
    subsystems: dict[str, SubsystemResult] = Field(default_factory=dict)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


class ScorePoint(BaseModel):
    date: str
    score: float


# ---------------------------------------------------------------------------
# Correlations & adjustments
# ---------------------------------------------------------------------------


class Correlation(BaseModel):
    factor: str
    strength: float = Field(ge=-1.0, le=1.0)  # Pearson r
    impact: float  # mean score delta over matched days
    sample_size: int
    confidence: Literal["low", "medium", "high"]


class PersonalizedAdjustment(BaseModel):
    factor: str
    description: str
    adjustment: int
    recommendation: str = ""


class TopFactor(BaseModel):
    factor: str
    impact: str  # "+4 points"
    strength: float


# ---------------------------------------------------------------------------
# Interpretation & reading
# ---------------------------------------------------------------------------


class Prediction(BaseModel):
    success_rate: int  # 0–100
    confidence: Literal["low", "medium", "high"]
    reasoning: str


class Explanations(BaseModel):
    spiritual: list[str] = Field(default_factory=list)
    personal: list[str] = Field(default_factory=list)


class Recommendations(BaseModel):
    do: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)
    best_time: str = "2-5pm"


class Insight(BaseModel):
    energy_score: int
    base_score: int
    total_adjustment: int = 0
    why: Explanations = Field(default_factory=Explanations)
    recommendations: Recommendations = Field(default_factory=Recommendations)
    prediction: Prediction
    personality_type: str = ""
    personality_traits: list[str] = Field(default_factory=list)


class DailyEnergyReading(BaseModel):
    """Top-level pipeline output — built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    date: str
    base_score: int
    adjusted_score: int
    energy_type: str
    energy_description: str = ""
    dominant_influence: str | None = None
    confidence_score: int = 0
    subsystems: dict[str, SubsystemResult] = Field(default_factory=dict)
    adjustments: list[PersonalizedAdjustment] = Field(default_factory=list)
    insight: Insight
    prediction: Prediction
    diagnostics: list[Diagnostic] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Forecasts & natal analyses
# ---------------------------------------------------------------------------


class CycleReading(BaseModel):
    value: int  # -100..100
    phase: Literal["High", "Low", "Critical"]
    percentage: int  # 0..100


class BiorhythmDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    cycles: dict[str, CycleReading]  # physical, emotional, intellectual
    composite: int
    overall_phase: str


class Compatibility(BaseModel):
    compatibility: int  # 0..100
    description: str
    best_activities: list[str] = Field(default_factory=list)


class NextPhase(BaseModel):
    phase: str
    date: str
    days_until: int


class SleepMoonCorrelation(BaseModel):
    full_moon_avg: float
    new_moon_avg: float
    correlation: Literal["positive", "negative", "neutral"]
    insight: str


class Forecast(BaseModel):
    start: str
    days: list[BiorhythmDay] = Field(default_factory=list)
    optimal_days: list[str] = Field(default_factory=list)
    critical_days: list[str] = Field(default_factory=list)
    next_lunar_phase: NextPhase


class DayBornAnalysis(BaseModel):
    day_number: int
    ruling_planet: str
    characteristics: list[str]
    strengths: list[str]
    challenges: list[str]
    lucky_colors: list[str]
    lucky_numbers: list[int]


class LifeLineAnalysis(BaseModel):
    life_path_number: int
    description: str
    purpose: str
    talents: list[str]
    challenges: list[str]
    career: list[str]
    relationships: str


class KarmicAnalysis(BaseModel):
    has_karmic_debt: bool
    karmic_numbers: list[int]  # reduced day, month, year
    karmic_debt_numbers: list[int] = Field(default_factory=list)
    lessons: list[str] = Field(default_factory=list)
    guidance: str


class NumerologyProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_of_birth: str
    day_born: DayBornAnalysis
    life_line: LifeLineAnalysis
    karmic: KarmicAnalysis
