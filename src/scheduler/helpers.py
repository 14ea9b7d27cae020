################################################################################
# File Name: helpers.py
# Purpose/Description: Factory and config helpers for the scheduling orchestrator
# Author: Michael Cornelison
# Creation Date: 2026-10-14
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-14    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Helper functions for building the orchestrator from configuration.

Configuration sections read here:
    monitoring.historyCapacity, monitoring.filterWindow
    analysis.trend.windowSize, analysis.trend.deltaThreshold
    analysis.falseAlarm.minReadings, analysis.falseAlarm.criticalZThreshold,
    analysis.falseAlarm.zThreshold
    subjects: list of {id, name, age, normalRanges?}
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Dict, List, Optional

from alert.helpers import createAlertQueueFromConfig, createDispatcherFromConfig
from analysis.false_alarm import (
    DEFAULT_CRITICAL_Z_THRESHOLD,
    DEFAULT_MIN_READINGS,
    DEFAULT_Z_THRESHOLD,
    FalseAlarmFilter,
)
from analysis.trend import DEFAULT_TREND_DELTA_THRESHOLD, DEFAULT_TREND_WINDOW, TrendDetector
from vitals.history import SubjectRecord
from vitals.types import DEFAULT_HISTORY_CAPACITY, NormalRange, VitalKind, parseVitalKind

from .orchestrator import SchedulingOrchestrator
from .types import DEFAULT_FILTER_WINDOW

logger = logging.getLogger(__name__)


def getMonitoringConfig(config: dict[str, Any]) -> dict[str, Any]:
    """Get the monitoring configuration section."""
    return config.get('monitoring', {})


def getAnalysisConfig(config: dict[str, Any]) -> dict[str, Any]:
    """Get the analysis configuration section."""
    return config.get('analysis', {})


def getDefaultMonitoringConfig() -> dict[str, Any]:
    """
    Get default monitoring and analysis configuration.

    Returns:
        Dictionary with 'monitoring' and 'analysis' sections
    """
    return {
        'monitoring': {
            'cycles': 5,
            'historyCapacity': DEFAULT_HISTORY_CAPACITY,
            'filterWindow': DEFAULT_FILTER_WINDOW,
        },
        'analysis': {
            'trend': {
                'windowSize': DEFAULT_TREND_WINDOW,
                'deltaThreshold': DEFAULT_TREND_DELTA_THRESHOLD,
            },
            'falseAlarm': {
                'minReadings': DEFAULT_MIN_READINGS,
                'criticalZThreshold': DEFAULT_CRITICAL_Z_THRESHOLD,
                'zThreshold': DEFAULT_Z_THRESHOLD,
            },
        },
    }


def parseNormalRanges(rangesConfig: Optional[dict[str, Any]]) -> Dict[VitalKind, NormalRange]:
    """
    Parse per-vital normal range overrides.

    Args:
        rangesConfig: Mapping of vital name to [low, high] or {low, high}

    Returns:
        Normal range per VitalKind

    Raises:
        ValueError: If a vital name or range is malformed
    """
    ranges: Dict[VitalKind, NormalRange] = {}
    for vitalName, bounds in (rangesConfig or {}).items():
        vitalKind = parseVitalKind(vitalName)
        if isinstance(bounds, dict):
            low, high = bounds['low'], bounds['high']
        else:
            low, high = bounds
        ranges[vitalKind] = NormalRange(float(low), float(high))
    return ranges


def validateMonitoringConfig(config: dict[str, Any]) -> list[str]:
    """
    Validate monitoring, analysis and subject configuration.

    Args:
        config: Full configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    monitoring = getMonitoringConfig(config)

    for key, minimum in (('historyCapacity', 1), ('filterWindow', 1), ('cycles', 0)):
        if key in monitoring:
            value = monitoring[key]
            if not isinstance(value, int) or isinstance(value, bool):
                errors.append(f"monitoring.{key} must be an integer")
            elif value < minimum:
                errors.append(f"monitoring.{key} must be at least {minimum}")

    trend = getAnalysisConfig(config).get('trend', {})
    if 'windowSize' in trend and (not isinstance(trend['windowSize'], int) or trend['windowSize'] < 2):
        errors.append("analysis.trend.windowSize must be an integer of at least 2")

    seenIds = set()
    for index, subject in enumerate(config.get('subjects', [])):
        if 'id' not in subject:
            errors.append(f"subjects[{index}] is missing 'id'")
            continue
        if subject['id'] in seenIds:
            errors.append(f"subjects[{index}] duplicates id {subject['id']}")
        seenIds.add(subject['id'])
        if not subject.get('name'):
            errors.append(f"subjects[{index}] is missing 'name'")
        try:
            parseNormalRanges(subject.get('normalRanges'))
        except (KeyError, TypeError, ValueError) as e:
            errors.append(f"subjects[{index}] has invalid normalRanges: {e}")

    return errors


def createTrendDetectorFromConfig(config: dict[str, Any]) -> TrendDetector:
    trend = getAnalysisConfig(config).get('trend', {})
    return TrendDetector(
        windowSize=trend.get('windowSize', DEFAULT_TREND_WINDOW),
        deltaThreshold=trend.get('deltaThreshold', DEFAULT_TREND_DELTA_THRESHOLD),
    )


def createFalseAlarmFilterFromConfig(config: dict[str, Any]) -> FalseAlarmFilter:
    falseAlarm = getAnalysisConfig(config).get('falseAlarm', {})
    return FalseAlarmFilter(
        minReadings=falseAlarm.get('minReadings', DEFAULT_MIN_READINGS),
        criticalThreshold=falseAlarm.get('criticalZThreshold', DEFAULT_CRITICAL_Z_THRESHOLD),
        defaultThreshold=falseAlarm.get('zThreshold', DEFAULT_Z_THRESHOLD),
    )


def createOrchestratorFromConfig(
    config: dict[str, Any],
    clock: Callable[[], datetime] = datetime.now
) -> SchedulingOrchestrator:
    """
    Create a SchedulingOrchestrator from configuration.

    Subjects listed in config are not registered here; see
    registerConfiguredSubjects.

    Args:
        config: Full configuration dictionary
        clock: Shared source of timestamps

    Returns:
        Configured SchedulingOrchestrator
    """
    monitoring = getMonitoringConfig(config)
    orchestrator = SchedulingOrchestrator(
        queue=createAlertQueueFromConfig(config),
        dispatcher=createDispatcherFromConfig(config, clock),
        falseAlarmFilter=createFalseAlarmFilterFromConfig(config),
        trendDetector=createTrendDetectorFromConfig(config),
        historyCapacity=monitoring.get('historyCapacity', DEFAULT_HISTORY_CAPACITY),
        filterWindow=monitoring.get('filterWindow', DEFAULT_FILTER_WINDOW),
        clock=clock,
    )
    logger.info("SchedulingOrchestrator created from config")
    return orchestrator


def registerConfiguredSubjects(
    orchestrator: SchedulingOrchestrator,
    config: dict[str, Any]
) -> List[SubjectRecord]:
    """
    Register every subject listed in config.

    Args:
        orchestrator: Target orchestrator
        config: Full configuration dictionary

    Returns:
        Registered records, in config order

    Raises:
        DuplicateSubjectError: If an id is already registered
        SubjectValidationError: If a subject entry is invalid
    """
    records = []
    for subject in config.get('subjects', []):
        records.append(orchestrator.registerSubject(
            subject['id'],
            subject['name'],
            subject['age'],
            normalRanges=parseNormalRanges(subject.get('normalRanges')),
        ))
    return records
