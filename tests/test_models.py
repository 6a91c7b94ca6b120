"""Tests for the energy model contract."""

from datetime import date

import pytest
from pydantic import TypeAdapter, ValidationError

from app.energy.errors import ClampViolation, ProfileMissing, check_bounds
from app.energy.models import (
    UPSERT_CATEGORIES,
    BirthPlace,
    Correlation,
    DailyEnergyReading,
    LifestyleLogEntry,
    LogCategory,
    MeditationEntry,
    SleepEntry,
    UserProfile,
)

adapter = TypeAdapter(LifestyleLogEntry)


class TestLogEntries:
    def test_discriminated_by_category(self):
        entry = adapter.validate_python({"category": "meditation", "date": "2024-06-01", "duration": 15})
        assert isinstance(entry, MeditationEntry)
        assert entry.type == "silent"

    def test_date_normalized_on_validation(self):
        entry = SleepEntry(date="1990-05-15T04:23:00.000Z", hours=7)
        assert entry.date == "1990-05-15"

    def test_date_object_accepted(self):
        assert SleepEntry(date=date(2024, 6, 1), hours=7).date == "2024-06-01"

    def test_bad_date_rejected(self):
        with pytest.raises(ValidationError):
            SleepEntry(date="yesterday", hours=7)

    def test_sleep_hours_bounded(self):
        with pytest.raises(ValidationError):
            SleepEntry(date="2024-06-01", hours=25)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            adapter.validate_python({"category": "mood", "date": "2024-06-01"})

    def test_upsert_categories(self):
        assert UPSERT_CATEGORIES == {LogCategory.sleep, LogCategory.weather, LogCategory.biometric}


class TestProfileAndCorrelation:
    def test_birth_place_bounds(self):
        with pytest.raises(ValidationError):
            BirthPlace(latitude=91, longitude=0)

    def test_profile_frozen(self):
        profile = UserProfile(date_of_birth="1990-05-15")
        with pytest.raises(ValidationError):
            profile.name = "x"

    def test_correlation_strength_bounded(self):
        with pytest.raises(ValidationError):
            Correlation(factor="sleep_hours", strength=1.5, impact=0, sample_size=5, confidence="low")

    def test_reading_requires_insight(self):
        with pytest.raises(ValidationError):
            DailyEnergyReading(date="2024-06-01", base_score=50, adjusted_score=50, energy_type="x")


class TestErrors:
    def test_profile_missing_message(self):
        assert str(ProfileMissing()) == "No birth data available for this user"

    def test_check_bounds(self):
        assert check_bounds(0) == 0
        assert check_bounds(100) == 100
        with pytest.raises(ClampViolation):
            check_bounds(100.5)
