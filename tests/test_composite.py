"""Tests for the composite aggregator and the reading context."""

from unittest.mock import patch

import pytest

from app.energy import composite
from app.energy.composite import (
    ENERGY_TYPES,
    compute_composite,
    confidence_score,
    dominant_influence,
    energy_type,
)
from app.energy.context import ReadingContext
from app.energy.errors import ProfileMissing
from app.energy.models import SubsystemResult, UserProfile

from tests.conftest import TARGET


def _boom(*args, **kwargs):
    raise RuntimeError("ephemeris unavailable")


def _fixed(name: str, score: float):
    def scorer(birth, target, location=None):
        return SubsystemResult(name=name, score=score, facts=[name])
    return scorer


class TestComputeComposite:
    def test_missing_profile(self):
        with pytest.raises(ProfileMissing):
            compute_composite(None, TARGET)

    def test_missing_birth_date(self):
        with pytest.raises(ProfileMissing):
            compute_composite(UserProfile(date_of_birth=""), TARGET)

    def test_all_subsystems_present(self, profile):
        result = compute_composite(profile, TARGET)
        assert list(result.subsystems) == ["numerology", "lunar", "astrology", "biorhythm"]
        assert result.diagnostics == []
        assert 0 <= result.base_score <= 100
        assert 0 <= result.confidence_score <= 100
        assert result.date == TARGET

    def test_energy_type_from_numerology(self, profile):
        # Life Path 3, Personal Day 6: (3 + 6) % 9 = 0
        result = compute_composite(profile, TARGET)
        assert result.energy_type == ENERGY_TYPES[0][0] == "Creative Flow"

    def test_deterministic(self, profile):
        assert compute_composite(profile, TARGET) == compute_composite(profile, TARGET)

    def test_base_is_rounded_mean(self, profile):
        scorers = {
            "numerology": _fixed("numerology", 70),
            "lunar": _fixed("lunar", 75),
            "astrology": _fixed("astrology", 50),
            "biorhythm": _fixed("biorhythm", 62),
        }
        with patch.dict(composite.SCORERS, scorers):
            result = compute_composite(profile, TARGET)
        # (70 + 75 + 50 + 62) / 4 = 64.25
        assert result.base_score == 64
        assert result.dominant_influence == "lunar"

    def test_failed_subsystem_is_excluded(self, profile):
        ctx = ReadingContext()
        scorers = {
            "numerology": _fixed("numerology", 80),
            "lunar": _boom,
            "astrology": _fixed("astrology", 60),
            "biorhythm": _fixed("biorhythm", 70),
        }
        with patch.dict(composite.SCORERS, scorers):
            result = compute_composite(profile, TARGET, ctx)
        assert "lunar" not in result.subsystems
        assert result.base_score == 70
        assert [(d.kind, d.source) for d in result.diagnostics] == [("subsystem_failure", "lunar")]
        assert "ephemeris unavailable" in result.diagnostics[0].message
        assert [p.step for p in ctx.failures()] == ["subsystem.lunar"]

    def test_every_subsystem_failed(self, profile):
        with patch.dict(composite.SCORERS, {name: _boom for name in composite.SCORERS}):
            result = compute_composite(profile, TARGET)
        assert result.subsystems == {}
        assert result.base_score == 50
        assert result.energy_type == "Balanced"
        assert result.dominant_influence is None
        assert len(result.diagnostics) == 4

    def test_failure_is_logged(self, profile, caplog):
        with patch.dict(composite.SCORERS, {"astrology": _boom}):
            with caplog.at_level("WARNING", logger="app.energy.composite"):
                compute_composite(profile, TARGET)
        assert any("astrology" in r.getMessage() for r in caplog.records)


class TestHelpers:
    def test_energy_type_wraps(self):
        assert energy_type(9, 9)[0] == ENERGY_TYPES[0][0]
        assert energy_type(4, 4)[0] == ENERGY_TYPES[8][0]

    def test_dominant_influence_tie_keeps_first(self):
        subsystems = {
            "a": SubsystemResult(name="a", score=30),
            "b": SubsystemResult(name="b", score=70),
        }
        assert dominant_influence(subsystems) == "a"

    def test_confidence(self):
        assert confidence_score([60, 60, 60]) == 100
        # stddev of [40, 80] is 20
        assert confidence_score([40, 80]) == 60
        assert confidence_score([0, 100]) == 0


class TestReadingContext:
    def test_report(self):
        ctx = ReadingContext()
        ctx.record("load")
        ctx.record("subsystem.lunar", success=False, error=RuntimeError("bad"))
        ctx.record("composite")
        report = ctx.report()
        assert report["total"] == 3
        assert report["successful"] == 2
        assert report["failed"] == 1
        assert report["first_failure"] == {"step": "subsystem.lunar", "error": "bad"}

    def test_contexts_are_independent(self, profile):
        a, b = ReadingContext(), ReadingContext()
        compute_composite(profile, TARGET, a)
        assert b.trace == []
        assert a.trace
