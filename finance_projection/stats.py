"""
Statistics Primitives
Mean and dispersion used as trend and confidence signals
"""

import statistics
from typing import Sequence


def average(values: Sequence[float]) -> float:
    """
    Arithmetic mean of a sequence

    Args:
        values: Numeric values

    Returns:
        Mean value, or 0 for an empty sequence
    """
    if not values:
        return 0.0
    return statistics.fmean(values)


def dispersion(values: Sequence[float]) -> float:
    """
    Population standard deviation around the mean

    Args:
        values: Numeric values

    Returns:
        Root-mean-square deviation, or 0 for an empty sequence
    """
    if not values:
        return 0.0
    return statistics.pstdev(values, mu=average(values))
