################################################################################
# File Name: false_alarm.py
# Purpose/Description: Statistical false-alarm filter for candidate alerts
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Statistical false-alarm filter.

A candidate alert is judged against the recent window of the same
(subject, vital) pair, most recent reading last. The latest reading's
z-score is compared with a tolerance that depends on the candidate risk:

- CRITICAL: suppress when z < 2.5
- otherwise: suppress when z < 1.5

A reading close to its own recent baseline is treated as noise even if it
nominally crosses a classification band. The filter never suppresses when
the window holds fewer than five readings or has zero variance.

Usage:
    from analysis.false_alarm import isLikelyFalseAlarm

    if isLikelyFalseAlarm(RiskLevel.MEDIUM, recentReadings):
        # drop the alert
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from vitals.types import RiskLevel

from .calculations import (
    calculateMean,
    calculatePopulationStandardDeviation,
    calculateZScore,
    extractValues,
)

logger = logging.getLogger(__name__)


# ================================================================================
# Constants
# ================================================================================

# Minimum window size before the filter may suppress anything
DEFAULT_MIN_READINGS = 5

# z-score tolerance for CRITICAL candidates
DEFAULT_CRITICAL_Z_THRESHOLD = 2.5

# z-score tolerance for every other candidate
DEFAULT_Z_THRESHOLD = 1.5


# ================================================================================
# Data Classes
# ================================================================================

@dataclass
class FilterDecision:
    """
    Outcome of a filter evaluation.

    Attributes:
        suppress: True when the candidate is judged a false alarm
        reason: Short machine readable reason
        zScore: z-score of the latest reading (None if not computed)
        threshold: Threshold applied (None if not computed)
        sampleCount: Readings in the window
    """

    suppress: bool
    reason: str
    zScore: Optional[float] = None
    threshold: Optional[float] = None
    sampleCount: int = 0

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'suppress': self.suppress,
            'reason': self.reason,
            'zScore': round(self.zScore, 3) if self.zScore is not None else None,
            'threshold': self.threshold,
            'sampleCount': self.sampleCount,
        }


# ================================================================================
# Filter
# ================================================================================

class FalseAlarmFilter:
    """
    z-score based false-alarm filter.

    Stateless apart from its configured thresholds; safe to share.
    """

    def __init__(
        self,
        minReadings: int = DEFAULT_MIN_READINGS,
        criticalThreshold: float = DEFAULT_CRITICAL_Z_THRESHOLD,
        defaultThreshold: float = DEFAULT_Z_THRESHOLD
    ):
        self.minReadings = minReadings
        self.criticalThreshold = criticalThreshold
        self.defaultThreshold = defaultThreshold

    def getThreshold(self, candidateRisk: RiskLevel) -> float:
        if candidateRisk == RiskLevel.CRITICAL:
            return self.criticalThreshold
        return self.defaultThreshold

    def evaluate(
        self,
        candidateRisk: RiskLevel,
        recentReadings: Sequence[Any]
    ) -> FilterDecision:
        """
        Evaluate a candidate alert.

        Args:
            candidateRisk: Risk level of the candidate alert
            recentReadings: Window for the same subject and vital, latest last

        Returns:
            FilterDecision describing the outcome
        """
        sampleCount = len(recentReadings)
        if sampleCount < self.minReadings:
            return FilterDecision(
                suppress=False,
                reason='insufficient_data',
                sampleCount=sampleCount,
            )

        values = extractValues(recentReadings)
        mean = calculateMean(values)
        stdDev = calculatePopulationStandardDeviation(values, mean)

        if stdDev == 0:
            return FilterDecision(
                suppress=False,
                reason='zero_variance',
                sampleCount=sampleCount,
            )

        zScore = calculateZScore(values[-1], mean, stdDev)
        threshold = self.getThreshold(candidateRisk)
        suppress = zScore < threshold

        return FilterDecision(
            suppress=suppress,
            reason='within_baseline' if suppress else 'outlier',
            zScore=zScore,
            threshold=threshold,
            sampleCount=sampleCount,
        )

    def isLikelyFalseAlarm(
        self,
        candidateRisk: RiskLevel,
        recentReadings: Sequence[Any]
    ) -> bool:
        """
        Check whether a candidate alert is probably noise.

        Args:
            candidateRisk: Risk level of the candidate alert
            recentReadings: Window for the same subject and vital, latest last

        Returns:
            True if the alert should be suppressed
        """
        return self.evaluate(candidateRisk, recentReadings).suppress


_defaultFilter = FalseAlarmFilter()


def isLikelyFalseAlarm(candidateRisk: RiskLevel, recentReadings: Sequence[Any]) -> bool:
    """
    Check a candidate alert with the default thresholds.

    Args:
        candidateRisk: Risk level of the candidate alert
        recentReadings: Window for the same subject and vital, latest last

    Returns:
        True if the alert should be suppressed
    """
    return _defaultFilter.isLikelyFalseAlarm(candidateRisk, recentReadings)
