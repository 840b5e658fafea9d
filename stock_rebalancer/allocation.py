"""Target allocation validation."""

import operator
from collections.abc import Iterable, Mapping
from functools import reduce

from .config import DEFAULT_CONFIG
from .errors import InvalidAllocation


def float_total(values: Iterable[float]) -> float:
    """Add values left to right with plain float addition.

    ``sum()`` compensates rounding error for floats on Python 3.12+, which
    would make ten fractions of 0.1 add up to exactly 1.
    """
    return reduce(operator.add, values, 0.0)


def build_allocation(
    allocation: dict[str, float],
    tolerance: float = 0.0,
) -> dict[str, float]:
    """Validate that target fractions add up to 1 and return them unchanged.

    Args:
        allocation: Target fraction of portfolio value by stock name.
        tolerance: Accepted distance between the sum and 1. The default of 0
            requires an exact float sum, so ten fractions of 0.1 are rejected;
            pass ``DEFAULT_CONFIG.ALLOCATION_SUM_TOLERANCE`` to accept them.

    Returns:
        The same mapping that was passed in.

    Raises:
        InvalidAllocation: If the fractions do not add up to 1.
    """
    total = float_total(allocation.values())
    if abs(total - 1) > tolerance:
        raise InvalidAllocation(total)
    return allocation


def allocation_total(
    allocation: Mapping[str, float],
    decimals: int = DEFAULT_CONFIG.ALLOCATION_DISPLAY_DECIMALS,
) -> float:
    return round(float_total(allocation.values()), decimals)


def remaining_allocation(
    entered: Iterable[float],
    decimals: int = DEFAULT_CONFIG.ALLOCATION_DISPLAY_DECIMALS,
) -> float:
    """Fraction still unassigned after the values entered so far."""
    return round(1 - float_total(entered), decimals)
