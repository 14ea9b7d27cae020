################################################################################
# File Name: calculations.py
# Purpose/Description: Pure calculation functions for reading-window statistics
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-10-12    | M. Cornelison | Population std-dev, z-score, mean delta
# 2026-10-19    | M. Cornelison | Exact zero std-dev for constant series
# ================================================================================
################################################################################

"""
Pure calculation functions for reading-window statistics.

Provides:
- extractValues: Accept readings or bare numbers
- calculateMean: Arithmetic mean
- calculatePopulationStandardDeviation: Population (n) standard deviation
- calculateZScore: Absolute distance from the mean in standard deviations
- calculateMeanDelta: Average of successive differences

These are pure functions with no side effects.
"""

import math
from typing import Any, Iterable, List, Optional

from .exceptions import InsufficientDataError


# ================================================================================
# Input Helpers
# ================================================================================

def extractValues(items: Iterable[Any]) -> List[float]:
    """
    Convert a sequence of readings or numbers into floats.

    Args:
        items: Objects with a ``value`` attribute, or numbers

    Returns:
        List of float values in the same order
    """
    values = []
    for item in items:
        value = getattr(item, 'value', item)
        values.append(float(value))
    return values


# ================================================================================
# Statistics Calculator Functions
# ================================================================================

def calculateMean(values: List[float]) -> float:
    """
    Calculate arithmetic mean of values.

    Args:
        values: List of numeric values

    Returns:
        Mean value

    Raises:
        InsufficientDataError: If values list is empty
    """
    if not values:
        raise InsufficientDataError("Cannot calculate mean of empty list")
    return sum(values) / len(values)


def calculatePopulationStandardDeviation(
    values: List[float],
    mean: Optional[float] = None
) -> float:
    """
    Calculate population standard deviation of values.

    Divides by n, not n-1: the window is treated as the whole population
    the latest reading is compared against.

    Args:
        values: List of numeric values
        mean: Pre-calculated mean (optional, will calculate if not provided)

    Returns:
        Standard deviation

    Raises:
        InsufficientDataError: If values list is empty
    """
    if not values:
        raise InsufficientDataError(
            "Cannot calculate standard deviation of empty list"
        )

    # A constant series is exactly 0; sum/len can miss its value by one ulp
    if max(values) == min(values):
        return 0.0

    if mean is None:
        mean = calculateMean(values)

    squaredDiffs = [(v - mean) ** 2 for v in values]
    variance = sum(squaredDiffs) / len(values)
    return math.sqrt(variance)


def calculateZScore(value: float, mean: float, stdDev: float) -> float:
    """
    Calculate the absolute z-score of a value.

    Args:
        value: Value to score
        mean: Window mean
        stdDev: Window standard deviation (must be non-zero)

    Returns:
        |value - mean| / stdDev

    Raises:
        ZeroDivisionError: If stdDev is zero
    """
    if stdDev == 0:
        raise ZeroDivisionError("Cannot calculate z-score with zero standard deviation")
    return abs(value - mean) / stdDev


def calculateMeanDelta(values: List[float]) -> float:
    """
    Calculate the average of successive differences.

    For [a, b, c] returns ((b - a) + (c - b)) / 2.

    Args:
        values: Ordered values, oldest first

    Returns:
        Mean successive delta

    Raises:
        InsufficientDataError: If fewer than 2 values provided
    """
    if len(values) < 2:
        raise InsufficientDataError(
            "Cannot calculate deltas with fewer than 2 values"
        )

    deltas = [values[i] - values[i - 1] for i in range(1, len(values))]
    return sum(deltas) / len(deltas)
