"""
Unit Tests for Threshold Cutoff Calculator

Pins the rounding rule (round up, clamp to 1) at the boundary values.
"""

import pytest

from award_system.cutoff_calculator import CutoffPopulation, ThresholdCutoffCalculator, cutoff
from award_system.eligibility_exceptions import InvalidThresholdException


class TestCutoff:
    """Tests for the cutoff function."""

    @pytest.mark.parametrize("population,threshold,expected", [
        (10, 0.5, 5),
        (11, 0.5, 6),
        (1, 0.4, 1),
        (0, 0.4, 1),
        (0, 0.5, 1),
        (20, 0.4, 8),
        (6, 0.4, 3),
        (5, 0.4, 2),
        (3, 0.5, 2),
    ])
    def test_boundary_values(self, population, threshold, expected):
        assert cutoff(population, threshold) == expected

    def test_exact_products_do_not_round_up(self):
        """15 * 0.4 is exactly 6 even though the float product is not."""
        assert cutoff(15, 0.4) == 6
        assert cutoff(25, 0.4) == 10

    @pytest.mark.parametrize("threshold", [0.4, 0.5])
    def test_monotonic_in_population(self, threshold):
        values = [cutoff(n, threshold) for n in range(0, 200)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_never_below_minimum(self):
        assert cutoff(1, 0.01) == 1
        assert cutoff(0, 0.9, minimum=2) == 2

    @pytest.mark.parametrize("threshold", [0, 1, 1.5, -0.2])
    def test_invalid_threshold_raises(self, threshold):
        with pytest.raises(InvalidThresholdException) as exc_info:
            cutoff(10, threshold)
        assert exc_info.value.error_code == "ELIG_THRESHOLD_001"
        assert exc_info.value.context_dict["threshold"] == threshold

    def test_boolean_threshold_rejected(self):
        with pytest.raises(InvalidThresholdException):
            cutoff(10, True)

    def test_negative_population_raises(self):
        with pytest.raises(InvalidThresholdException) as exc_info:
            cutoff(-1, 0.5)
        assert exc_info.value.context_dict["population_size"] == -1


class TestThresholdCutoffCalculator:
    """Tests for the threshold-bound calculator."""

    def test_cutoff_uses_bound_threshold(self):
        calculator = ThresholdCutoffCalculator(0.4)
        assert calculator.cutoff(20) == 8

    def test_cutoffs_for_population_pair(self):
        calculator = ThresholdCutoffCalculator(0.5)
        result = calculator.cutoffs(CutoffPopulation(qualifier=11, skills=4))
        assert result == CutoffPopulation(qualifier=6, skills=2)

    def test_invalid_threshold_fails_at_construction(self):
        with pytest.raises(InvalidThresholdException):
            ThresholdCutoffCalculator(1.0)
