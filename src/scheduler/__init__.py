################################################################################
# File Name: __init__.py
# Purpose/Description: Scheduler subpackage for reading ingestion and dispatch cycles
# Author: Michael Cornelison
# Creation Date: 2026-10-13
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-13    | M. Cornelison | Initial subpackage creation
# 2026-10-14    | M. Cornelison | Added config helpers
# ================================================================================
################################################################################
"""
Scheduler Subpackage.

This subpackage contains the scheduling orchestrator:
- Subject registry and reading ingestion
- Reading source interface polled once per cycle
- Emergency injection
- Aggregate statistics

Usage:
    from scheduler import SchedulingOrchestrator

    orchestrator = SchedulingOrchestrator()
    orchestrator.registerSubject(1, "John Doe", 45)
    records = orchestrator.runCycle(readings)
"""

from .emergency import (
    EMERGENCY_READINGS,
    EMERGENCY_SHORTCUTS,
    EmergencyKind,
    createEmergencyReading,
    parseEmergencyKind,
)
from .exceptions import DuplicateSubjectError, SchedulerError, UnknownSubjectError
from .helpers import (
    createFalseAlarmFilterFromConfig,
    createOrchestratorFromConfig,
    createTrendDetectorFromConfig,
    getDefaultMonitoringConfig,
    getMonitoringConfig,
    parseNormalRanges,
    registerConfiguredSubjects,
    validateMonitoringConfig,
)
from .orchestrator import SchedulingOrchestrator, formatReadingMessage, formatTrendMessage
from .sources import ReadingSource, ScriptedReadingSource
from .types import DEFAULT_FILTER_WINDOW, CycleSummary, SystemStatistics

__all__ = [
    # Types
    'SystemStatistics',
    'CycleSummary',
    'DEFAULT_FILTER_WINDOW',
    # Emergencies
    'EmergencyKind',
    'EMERGENCY_READINGS',
    'EMERGENCY_SHORTCUTS',
    'createEmergencyReading',
    'parseEmergencyKind',
    # Exceptions
    'SchedulerError',
    'DuplicateSubjectError',
    'UnknownSubjectError',
    # Sources
    'ReadingSource',
    'ScriptedReadingSource',
    # Orchestrator
    'SchedulingOrchestrator',
    'formatReadingMessage',
    'formatTrendMessage',
    # Helper functions
    'createOrchestratorFromConfig',
    'createFalseAlarmFilterFromConfig',
    'createTrendDetectorFromConfig',
    'getDefaultMonitoringConfig',
    'getMonitoringConfig',
    'parseNormalRanges',
    'registerConfiguredSubjects',
    'validateMonitoringConfig',
]
