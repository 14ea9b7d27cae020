################################################################################
# File Name: classifier.py
# Purpose/Description: Risk classification of single vital-sign readings
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
Risk classification of single vital-sign readings.

Provides functions for mapping a (vital, value) pair to a RiskLevel without
requiring any history:

1. CRITICAL band (fixed, per vital)
2. HIGH band (fixed, per vital)
3. MEDIUM band (fixed, temperature and respiratory rate only)
4. Subject normal range: MEDIUM if violated
5. Otherwise LOW

Bands are module constants and are never adjusted per subject; only the
normal range used in step 4 comes from the subject.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import ClassificationError
from .types import DEFAULT_NORMAL_RANGES, NormalRange, RiskLevel, VitalKind

logger = logging.getLogger(__name__)


# ================================================================================
# Threshold Bands
# ================================================================================

@dataclass(frozen=True)
class Band:
    """
    Out-of-band limits; a value strictly below ``below`` or strictly above
    ``above`` falls in the band. Either limit may be None.
    """

    below: Optional[float] = None
    above: Optional[float] = None

    def matches(self, value: float) -> bool:
        if self.below is not None and value < self.below:
            return True
        if self.above is not None and value > self.above:
            return True
        return False


@dataclass(frozen=True)
class ThresholdTable:
    """Fixed bands for one vital sign."""

    critical: Optional[Band] = None
    high: Optional[Band] = None
    medium: Optional[Band] = None


THRESHOLD_TABLES: Dict[VitalKind, ThresholdTable] = {
    VitalKind.HEART_RATE: ThresholdTable(
        critical=Band(below=30, above=180),
        high=Band(below=50, above=120),
    ),
    VitalKind.OXYGEN_SATURATION: ThresholdTable(
        critical=Band(below=85),
        high=Band(below=92),
    ),
    VitalKind.BLOOD_PRESSURE: ThresholdTable(
        critical=Band(below=60, above=200),
        high=Band(below=80, above=160),
    ),
    VitalKind.TEMPERATURE: ThresholdTable(
        high=Band(below=35.0, above=39.0),
        medium=Band(below=35.5, above=38.5),
    ),
    VitalKind.RESPIRATORY_RATE: ThresholdTable(
        high=Band(below=8, above=30),
        medium=Band(below=10, above=25),
    ),
}


# ================================================================================
# Classification
# ================================================================================

def classifyRisk(
    vitalKind: VitalKind,
    value: float,
    normalRanges: Optional[Dict[VitalKind, NormalRange]] = None
) -> RiskLevel:
    """
    Classify a single reading.

    Args:
        vitalKind: Vital sign measured
        value: Measured value
        normalRanges: Subject normal ranges (defaults used when omitted)

    Returns:
        RiskLevel for the reading

    Raises:
        ClassificationError: If the vital kind has no threshold table
    """
    table = THRESHOLD_TABLES.get(vitalKind)
    if table is None:
        raise ClassificationError(
            f"No threshold table for vital: {vitalKind}",
            details={'vitalKind': str(vitalKind)}
        )

    if table.critical is not None and table.critical.matches(value):
        return RiskLevel.CRITICAL
    if table.high is not None and table.high.matches(value):
        return RiskLevel.HIGH
    if table.medium is not None and table.medium.matches(value):
        return RiskLevel.MEDIUM

    ranges = normalRanges or DEFAULT_NORMAL_RANGES
    normalRange = ranges.get(vitalKind, DEFAULT_NORMAL_RANGES[vitalKind])
    if not normalRange.contains(value):
        return RiskLevel.MEDIUM

    return RiskLevel.LOW


class RiskClassifier:
    """
    Classifier bound to one subject's normal ranges.

    Example:
        classifier = RiskClassifier(record.normalRanges)
        level = classifier.classify(VitalKind.HEART_RATE, 200)  # CRITICAL
    """

    def __init__(self, normalRanges: Optional[Dict[VitalKind, NormalRange]] = None):
        self._normalRanges = dict(DEFAULT_NORMAL_RANGES)
        if normalRanges:
            self._normalRanges.update(normalRanges)

    def classify(self, vitalKind: VitalKind, value: float) -> RiskLevel:
        """Classify a value for this subject."""
        return classifyRisk(vitalKind, value, self._normalRanges)

    def getNormalRange(self, vitalKind: VitalKind) -> NormalRange:
        return self._normalRanges[vitalKind]
