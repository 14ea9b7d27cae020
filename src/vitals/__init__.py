################################################################################
# File Name: __init__.py
# Purpose/Description: Vitals subpackage for readings, history and risk levels
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial subpackage creation
# ================================================================================
################################################################################
"""
Vitals Subpackage.

This subpackage contains the reading-side data model:
- Vital kinds, readings and risk levels
- Bounded per-subject reading windows
- Risk classification of single readings

Usage:
    from vitals import Reading, VitalKind, classifyRisk

    level = classifyRisk(VitalKind.HEART_RATE, 200)
"""

from .classifier import THRESHOLD_TABLES, Band, RiskClassifier, ThresholdTable, classifyRisk
from .exceptions import ClassificationError, SubjectValidationError, VitalsError
from .history import MAX_SUBJECT_AGE, MIN_SUBJECT_AGE, ReadingWindow, SubjectRecord
from .types import (
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_NORMAL_RANGES,
    VITAL_DISPLAY_NAMES,
    VITAL_UNITS,
    NormalRange,
    Reading,
    RiskLevel,
    VitalKind,
    getVitalDisplayName,
    parseVitalKind,
)

__all__ = [
    # Types
    'VitalKind',
    'RiskLevel',
    'Reading',
    'NormalRange',
    'DEFAULT_HISTORY_CAPACITY',
    'DEFAULT_NORMAL_RANGES',
    'VITAL_DISPLAY_NAMES',
    'VITAL_UNITS',
    'getVitalDisplayName',
    'parseVitalKind',
    # History
    'ReadingWindow',
    'SubjectRecord',
    'MIN_SUBJECT_AGE',
    'MAX_SUBJECT_AGE',
    # Classification
    'Band',
    'ThresholdTable',
    'THRESHOLD_TABLES',
    'RiskClassifier',
    'classifyRisk',
    # Exceptions
    'VitalsError',
    'ClassificationError',
    'SubjectValidationError',
]
