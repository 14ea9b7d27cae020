################################################################################
# File Name: types.py
# Purpose/Description: Type definitions for alert scheduling
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial implementation for US-011
# 2026-10-12    | M. Cornelison | Risk-level alerts, queue entries, SLA table
# 2026-10-15    | M. Cornelison | Dispatch records and alert state machine
# 2026-10-19    | M. Cornelison | Dispatch failure counter
# ================================================================================
################################################################################
"""
Type definitions for alert scheduling.

Contains enums, dataclasses, and constants used by the alert subpackage.
Depends only on vitals.types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from vitals.types import RiskLevel, VitalKind

from .exceptions import AlertStateError


# ================================================================================
# Constants
# ================================================================================

# Maximum response time per risk level (milliseconds)
SLA_DEADLINES_MS: Dict[RiskLevel, int] = {
    RiskLevel.CRITICAL: 2_000,
    RiskLevel.HIGH: 30_000,
    RiskLevel.MEDIUM: 300_000,
    RiskLevel.LOW: 3_600_000,
}

# Response guidance attached to each dispatch
RESPONSE_ACTIONS: Dict[RiskLevel, str] = {
    RiskLevel.CRITICAL: "Immediate medical attention required",
    RiskLevel.HIGH: "Nurse response needed within 30 seconds",
    RiskLevel.MEDIUM: "Check on patient within 5 minutes",
    RiskLevel.LOW: "Routine check during next rounds",
}

# Queue size above which a warning is logged (queue stays unbounded)
DEFAULT_QUEUE_WARN_SIZE = 1000


# ================================================================================
# Enums
# ================================================================================

class AlertState(Enum):
    """Lifecycle of an alert: CREATED -> DISPATCHED -> ACKNOWLEDGED."""

    CREATED = "created"
    DISPATCHED = "dispatched"
    ACKNOWLEDGED = "acknowledged"


# ================================================================================
# Data Classes
# ================================================================================

@dataclass
class Alert:
    """
    An alert awaiting or past dispatch.

    Only ``acknowledged`` (and the state that tracks it) changes after
    creation. Dispatch happens exactly once.

    Attributes:
        subjectId: Subject the alert concerns
        riskLevel: Urgency
        message: Human readable description
        vitalKind: Vital sign that triggered the alert
        createdAt: Creation time, start of the SLA clock
        acknowledged: Whether a clinician acknowledged the alert
        isTrend: True for trend alerts, False for classifier alerts
        state: Lifecycle state
        dispatchedAt: When the alert was dispatched
    """

    subjectId: int
    riskLevel: RiskLevel
    message: str
    vitalKind: VitalKind
    createdAt: datetime = field(default_factory=datetime.now)
    acknowledged: bool = False
    isTrend: bool = False
    state: AlertState = AlertState.CREATED
    dispatchedAt: Optional[datetime] = None

    def markDispatched(self, dispatchedAt: datetime) -> None:
        """
        Move the alert from CREATED to DISPATCHED.

        Raises:
            AlertStateError: If the alert was already dispatched
        """
        if self.state != AlertState.CREATED:
            raise AlertStateError(
                f"Alert already {self.state.value}",
                details={'subjectId': self.subjectId, 'message': self.message}
            )
        self.state = AlertState.DISPATCHED
        self.dispatchedAt = dispatchedAt

    def acknowledge(self) -> None:
        """
        Acknowledge a dispatched alert.

        Acknowledging twice is a no-op.

        Raises:
            AlertStateError: If the alert has not been dispatched yet
        """
        if self.state == AlertState.CREATED:
            raise AlertStateError(
                "Cannot acknowledge an alert before dispatch",
                details={'subjectId': self.subjectId, 'message': self.message}
            )
        self.acknowledged = True
        self.state = AlertState.ACKNOWLEDGED

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'subjectId': self.subjectId,
            'riskLevel': self.riskLevel.name,
            'message': self.message,
            'vitalKind': self.vitalKind.value,
            'createdAt': self.createdAt.isoformat(),
            'acknowledged': self.acknowledged,
            'isTrend': self.isTrend,
            'state': self.state.value,
            'dispatchedAt': self.dispatchedAt.isoformat() if self.dispatchedAt else None,
        }


@dataclass(order=True)
class QueueEntry:
    """
    Heap entry wrapping an alert.

    Ordered by (priority, createdAt, sequence); the alert itself never takes
    part in comparisons.
    """

    priority: int
    createdAt: datetime
    sequence: int
    alert: Alert = field(compare=False)

    @classmethod
    def forAlert(cls, alert: Alert, sequence: int) -> 'QueueEntry':
        return cls(
            priority=alert.riskLevel.value,
            createdAt=alert.createdAt,
            sequence=sequence,
            alert=alert,
        )


@dataclass
class DispatchRecord:
    """
    Report of one dispatched alert.

    Attributes:
        dispatchedAt: When the alert was dispatched
        riskLevel: Urgency of the alert
        subjectId: Subject the alert concerns
        vitalKind: Vital sign that triggered the alert
        message: Alert message
        responseMs: Milliseconds between creation and dispatch
        slaMet: Whether responseMs is within the level's deadline
        responseAction: Guidance for the responding clinician
    """

    dispatchedAt: datetime
    riskLevel: RiskLevel
    subjectId: int
    vitalKind: VitalKind
    message: str
    responseMs: int
    slaMet: bool
    responseAction: str = ""

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'timestamp': self.dispatchedAt.isoformat(),
            'riskLevel': self.riskLevel.name,
            'subjectId': self.subjectId,
            'vitalKind': self.vitalKind.value,
            'message': self.message,
            'responseMs': self.responseMs,
            'slaMet': self.slaMet,
            'responseAction': self.responseAction,
        }


@dataclass
class AlertStats:
    """
    Running counters for alert dispatch.

    Attributes:
        alertsDispatched: Total alerts dispatched
        falseAlarmsSuppressed: Candidate alerts dropped by the false-alarm filter
        slaBreaches: Dispatches that missed their deadline
        dispatchFailures: Alerts popped for dispatch that raised
        dispatchedByLevel: Dispatch count per risk level name
        lastDispatchTime: Time of most recent dispatch
    """

    alertsDispatched: int = 0
    falseAlarmsSuppressed: int = 0
    slaBreaches: int = 0
    dispatchFailures: int = 0
    dispatchedByLevel: Dict[str, int] = field(default_factory=dict)
    lastDispatchTime: Optional[datetime] = None

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'alertsDispatched': self.alertsDispatched,
            'falseAlarmsSuppressed': self.falseAlarmsSuppressed,
            'slaBreaches': self.slaBreaches,
            'dispatchFailures': self.dispatchFailures,
            'dispatchedByLevel': self.dispatchedByLevel.copy(),
            'lastDispatchTime': self.lastDispatchTime.isoformat() if self.lastDispatchTime else None,
        }
