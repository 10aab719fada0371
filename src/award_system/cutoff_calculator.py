"""
Threshold Cutoff Calculator

Converts a percentile threshold into the worst rank that still counts as
"top N%" of a population.

One rounding rule everywhere: round up, then clamp to a minimum of 1.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from .eligibility_exceptions import InvalidThresholdException


MINIMUM_CUTOFF = 1


@dataclass(frozen=True)
class CutoffPopulation:
    """Population sizes the qualifier and skills cutoffs are computed from."""
    qualifier: int
    skills: int


def cutoff(population_size: int, threshold_fraction: float, minimum: int = MINIMUM_CUTOFF) -> int:
    """
    Inclusive rank cutoff for the top threshold_fraction of a population.

    The product is taken in Decimal from the threshold's string form, so
    15 * 0.4 is exactly 6 rather than 6.000000000000001.

    Args:
        population_size: Number of ranked teams (>= 0)
        threshold_fraction: Fraction strictly between 0 and 1
        minimum: Smallest cutoff returned

    Returns:
        max(minimum, ceil(population_size * threshold_fraction))

    Raises:
        InvalidThresholdException: If the fraction is outside (0, 1) or the
            population is negative

    Example:
        >>> cutoff(11, 0.5)
        6
        >>> cutoff(0, 0.4)
        1
    """
    if isinstance(threshold_fraction, bool) or not 0 < threshold_fraction < 1:
        raise InvalidThresholdException(
            f"Threshold must be between 0 and 1 (exclusive), got {threshold_fraction}",
            threshold=threshold_fraction,
            population_size=population_size
        )
    if population_size < 0:
        raise InvalidThresholdException(
            f"Population size cannot be negative, got {population_size}",
            threshold=threshold_fraction,
            population_size=population_size
        )

    product = Decimal(population_size) * Decimal(str(threshold_fraction))
    return max(minimum, math.ceil(product))


class ThresholdCutoffCalculator:
    """
    Cutoff calculator bound to a single threshold.

    Usage:
        calculator = ThresholdCutoffCalculator(0.4)
        calculator.cutoff(20)   # 8
    """

    def __init__(self, threshold_fraction: float, minimum: int = MINIMUM_CUTOFF):
        # Validate eagerly so a bad rule fails at construction
        cutoff(0, threshold_fraction, minimum)
        self.threshold_fraction = threshold_fraction
        self.minimum = minimum

    def cutoff(self, population_size: int) -> int:
        return cutoff(population_size, self.threshold_fraction, self.minimum)

    def cutoffs(self, population: CutoffPopulation) -> CutoffPopulation:
        """Qualifier and skills cutoffs for a pair of population sizes."""
        return CutoffPopulation(
            qualifier=self.cutoff(population.qualifier),
            skills=self.cutoff(population.skills),
        )

    def __repr__(self) -> str:
        return f"ThresholdCutoffCalculator({self.threshold_fraction})"
