"""Tests for pure feature functions."""

import pytest

from app.energy.features import (
    aggregate,
    angular_distance,
    average_impact,
    clamp,
    confidence_tier,
    mean,
    pearson_correlation,
    population_stddev,
    round_half_up,
    sine_cycle,
    wrap_degrees,
)


class TestAggregate:
    def test_sum(self):
        assert aggregate([1.0, 2.0, 3.0], "sum") == 6.0

    def test_avg(self):
        assert aggregate([2.0, 4.0], "avg") == 3.0

    def test_max_min(self):
        assert aggregate([1.0, 5.0, 3.0], "max") == 5.0
        assert aggregate([1.0, 5.0, 3.0], "min") == 1.0

    def test_last(self):
        assert aggregate([1.0, 2.0, 9.0], "last") == 9.0

    def test_empty(self):
        assert aggregate([], "sum") is None

    def test_unknown_method_falls_back_to_avg(self):
        assert aggregate([2.0, 4.0], "unknown") == 3.0


class TestRounding:
    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (-1.5, -1), (4.49, 4)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_clamp(self):
        assert clamp(95 + 30) == 100
        assert clamp(-3) == 0
        assert clamp(42.5) == 42.5
        assert clamp(2.0, -1.0, 1.0) == 1.0


class TestStats:
    def test_mean(self):
        assert mean([]) is None
        assert mean([1, 2, 3]) == 2

    def test_population_stddev(self):
        assert population_stddev([]) == 0.0
        assert population_stddev([5, 5, 5]) == 0.0
        assert population_stddev([2, 4, 4, 4, 5, 5, 7, 9]) == 2.0


class TestPearson:
    def test_perfect_positive(self):
        assert pearson_correlation([1, 2, 3, 4, 5], [2, 4, 6, 8, 10]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson_correlation([1, 2, 3, 4, 5], [10, 8, 6, 4, 2]) == pytest.approx(-1.0)

    def test_symmetric(self):
        x = [7.5, 6.0, 8.0, 5.5, 9.0, 7.0]
        y = [70, 55, 72, 50, 81, 64]
        assert pearson_correlation(x, y) == pytest.approx(pearson_correlation(y, x))

    def test_constant_series_is_zero(self):
        assert pearson_correlation([8, 8, 8, 8, 8], [50, 60, 70, 80, 90]) == 0.0
        assert pearson_correlation([1, 2, 3, 4, 5], [60, 60, 60, 60, 60]) == 0.0

    def test_mismatched_or_empty(self):
        assert pearson_correlation([], []) == 0.0
        assert pearson_correlation([1, 2], [1]) == 0.0

    def test_bounded(self):
        x = [0.1 * i for i in range(50)]
        y = [3 * v + 1 for v in x]
        assert -1.0 <= pearson_correlation(x, y) <= 1.0


class TestAverageImpact:
    def test_centered_scores_average_to_zero(self):
        assert average_impact([6, 7, 8], [50, 60, 70]) == pytest.approx(0.0)

    def test_empty(self):
        assert average_impact([], []) == 0.0


class TestConfidenceTier:
    @pytest.mark.parametrize("n,tier", [(4, "low"), (9, "low"), (10, "medium"), (12, "medium"), (19, "medium"), (20, "high"), (30, "high")])
    def test_tiers(self, n, tier):
        assert confidence_tier(n) == tier


class TestAngles:
    def test_sine_cycle_quarter(self):
        assert sine_cycle(0, 23) == 0
        assert sine_cycle(7, 28) == 100
        assert sine_cycle(21, 28) == -100

    def test_wrap_degrees(self):
        assert wrap_degrees(370) == 10
        assert wrap_degrees(-10) == 350

    def test_angular_distance(self):
        assert angular_distance(10, 350) == 20
        assert angular_distance(0, 180) == 180
