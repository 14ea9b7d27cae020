################################################################################
# File Name: __init__.py
# Purpose/Description: Analysis subpackage for reading-window statistics
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-10-12    | M. Cornelison | Trend detection and false-alarm filter exports
# ================================================================================
################################################################################
"""
Analysis Subpackage.

This subpackage contains reading-window analysis components:
- Pure calculation functions (mean, population std, z-score, mean delta)
- Trend detection over the last readings of a window
- Statistical false-alarm filtering of candidate alerts

Usage:
    from analysis import detectTrend, isLikelyFalseAlarm

    if detectTrend(history):
        ...
"""

from .calculations import (
    calculateMean,
    calculateMeanDelta,
    calculatePopulationStandardDeviation,
    calculateZScore,
    extractValues,
)
from .exceptions import AnalysisError, InsufficientDataError
from .false_alarm import (
    DEFAULT_CRITICAL_Z_THRESHOLD,
    DEFAULT_MIN_READINGS,
    DEFAULT_Z_THRESHOLD,
    FalseAlarmFilter,
    FilterDecision,
    isLikelyFalseAlarm,
)
from .trend import (
    DEFAULT_TREND_DELTA_THRESHOLD,
    DEFAULT_TREND_WINDOW,
    TrendDetector,
    detectTrend,
)

__all__ = [
    # Calculations
    'extractValues',
    'calculateMean',
    'calculatePopulationStandardDeviation',
    'calculateZScore',
    'calculateMeanDelta',
    # Exceptions
    'AnalysisError',
    'InsufficientDataError',
    # Trend detection
    'TrendDetector',
    'detectTrend',
    'DEFAULT_TREND_WINDOW',
    'DEFAULT_TREND_DELTA_THRESHOLD',
    # False-alarm filter
    'FalseAlarmFilter',
    'FilterDecision',
    'isLikelyFalseAlarm',
    'DEFAULT_MIN_READINGS',
    'DEFAULT_CRITICAL_Z_THRESHOLD',
    'DEFAULT_Z_THRESHOLD',
]
