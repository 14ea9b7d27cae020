################################################################################
# File Name: types.py
# Purpose/Description: Type definitions for the scheduling orchestrator
# Author: Michael Cornelison
# Creation Date: 2026-10-13
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-13    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Type definitions for the scheduling orchestrator.

Contains the statistics snapshot and per-cycle summary dataclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

# History entries handed to the false-alarm filter
DEFAULT_FILTER_WINDOW = 10


@dataclass
class SystemStatistics:
    """
    Aggregate statistics snapshot.

    Attributes:
        subjectCount: Registered subjects
        deviceCount: Attached reading sources
        alertsDispatched: Alerts dispatched since start
        falseAlarmsSuppressed: Candidate alerts dropped as false alarms
        alertsCreated: Alerts pushed to the queue (classifier and trend)
        trendAlerts: Trend alerts pushed to the queue
        slaBreaches: Dispatches that missed their deadline
        readingsProcessed: Readings ingested for known subjects
        readingsDropped: Readings dropped (unknown subject or processing error)
        cyclesCompleted: Monitoring cycles completed
        pendingAlerts: Alerts waiting in the queue
    """

    subjectCount: int = 0
    deviceCount: int = 0
    alertsDispatched: int = 0
    falseAlarmsSuppressed: int = 0
    alertsCreated: int = 0
    trendAlerts: int = 0
    slaBreaches: int = 0
    readingsProcessed: int = 0
    readingsDropped: int = 0
    cyclesCompleted: int = 0
    pendingAlerts: int = 0

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'subjectCount': self.subjectCount,
            'deviceCount': self.deviceCount,
            'alertsDispatched': self.alertsDispatched,
            'falseAlarmsSuppressed': self.falseAlarmsSuppressed,
            'alertsCreated': self.alertsCreated,
            'trendAlerts': self.trendAlerts,
            'slaBreaches': self.slaBreaches,
            'readingsProcessed': self.readingsProcessed,
            'readingsDropped': self.readingsDropped,
            'cyclesCompleted': self.cyclesCompleted,
            'pendingAlerts': self.pendingAlerts,
        }


@dataclass
class CycleSummary:
    """
    Outcome of one monitoring cycle.

    Attributes:
        cycleNumber: 1-based cycle counter
        startedAt: When ingestion began
        readingsProcessed: Readings ingested this cycle
        readingsDropped: Readings dropped this cycle
        alertsDispatched: Alerts dispatched at the end of the cycle
        slaBreaches: Dispatches that missed their deadline
        errorCount: Readings that failed with an unexpected error
        dispatchedByLevel: Dispatch count per risk level name
    """

    cycleNumber: int
    startedAt: datetime
    readingsProcessed: int = 0
    readingsDropped: int = 0
    alertsDispatched: int = 0
    slaBreaches: int = 0
    errorCount: int = 0
    dispatchedByLevel: Dict[str, int] = field(default_factory=dict)
    completedAt: Optional[datetime] = None

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'cycleNumber': self.cycleNumber,
            'startedAt': self.startedAt.isoformat(),
            'completedAt': self.completedAt.isoformat() if self.completedAt else None,
            'readingsProcessed': self.readingsProcessed,
            'readingsDropped': self.readingsDropped,
            'alertsDispatched': self.alertsDispatched,
            'slaBreaches': self.slaBreaches,
            'errorCount': self.errorCount,
            'dispatchedByLevel': self.dispatchedByLevel.copy(),
        }
