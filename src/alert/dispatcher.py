################################################################################
# File Name: dispatcher.py
# Purpose/Description: Alert dispatch with response-time and SLA tracking
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial implementation for US-011
# 2026-10-12    | M. Cornelison | Reworked from threshold manager into dispatcher
# 2026-10-15    | M. Cornelison | Count suppressed false alarms
# 2026-10-19    | M. Cornelison | Pop and dispatch one alert at a time
# ================================================================================
################################################################################
"""
Alert dispatch with response-time and SLA tracking.

Dispatching an alert:
- computes the response time (dispatch time minus creation time)
- checks it against the per-level deadline
- marks the alert DISPATCHED
- logs a dispatch record (WARNING when the deadline was missed)
- notifies registered callbacks
- updates running counters

A missed deadline is reported, never fatal; dispatch always proceeds.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Dict, List, Optional

from common.error_handler import ErrorCollector
from vitals.types import RiskLevel

from .exceptions import AlertConfigurationError
from .queue import AlertQueue
from .types import (
    RESPONSE_ACTIONS,
    SLA_DEADLINES_MS,
    Alert,
    AlertStats,
    DispatchRecord,
)

logger = logging.getLogger(__name__)


def calculateResponseMs(createdAt: datetime, dispatchedAt: datetime) -> int:
    """
    Milliseconds between creation and dispatch, truncated, never negative.

    Args:
        createdAt: Alert creation time
        dispatchedAt: Dispatch time

    Returns:
        Elapsed milliseconds
    """
    elapsedMs = int((dispatchedAt - createdAt).total_seconds() * 1000)
    return max(0, elapsedMs)


def checkSlaCompliance(
    riskLevel: RiskLevel,
    responseMs: int,
    deadlinesMs: Optional[Dict[RiskLevel, int]] = None
) -> bool:
    """
    Check a response time against the deadline for a risk level.

    Args:
        riskLevel: Alert risk level
        responseMs: Measured response time
        deadlinesMs: Deadline table (defaults to SLA_DEADLINES_MS)

    Returns:
        True if responseMs <= deadline
    """
    table = deadlinesMs or SLA_DEADLINES_MS
    return responseMs <= table[riskLevel]


class AlertDispatcher:
    """
    Dispatches alerts and keeps dispatch statistics.

    Example:
        dispatcher = AlertDispatcher()
        dispatcher.onDispatch(lambda record: print(record.toDict()))
        records = dispatcher.dispatchAll(queue)
    """

    def __init__(
        self,
        slaDeadlinesMs: Optional[Dict[RiskLevel, int]] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize the dispatcher.

        Args:
            slaDeadlinesMs: Deadline per risk level (defaults to SLA_DEADLINES_MS)
            clock: Source of dispatch timestamps

        Raises:
            AlertConfigurationError: If the deadline table misses a level
        """
        deadlines = dict(SLA_DEADLINES_MS)
        if slaDeadlinesMs:
            deadlines.update(slaDeadlinesMs)
        missing = [level.name for level in RiskLevel if level not in deadlines]
        if missing:
            raise AlertConfigurationError(
                f"SLA deadlines missing for: {', '.join(missing)}"
            )

        self._deadlinesMs = deadlines
        self._clock = clock
        self._stats = AlertStats()
        self._onDispatchCallbacks: list[Callable[[DispatchRecord], None]] = []
        self._lock = threading.Lock()

    # ================================================================================
    # Configuration
    # ================================================================================

    def getDeadlineMs(self, riskLevel: RiskLevel) -> int:
        return self._deadlinesMs[riskLevel]

    def onDispatch(self, callback: Callable[[DispatchRecord], None]) -> None:
        """
        Register a callback for dispatch records.

        Args:
            callback: Function called with each DispatchRecord
        """
        self._onDispatchCallbacks.append(callback)

    # ================================================================================
    # Dispatch
    # ================================================================================

    def dispatch(
        self,
        alert: Alert,
        dispatchTime: Optional[datetime] = None
    ) -> DispatchRecord:
        """
        Dispatch one alert.

        Args:
            alert: Alert popped from the queue
            dispatchTime: Dispatch timestamp (clock is used when omitted)

        Returns:
            DispatchRecord for the alert

        Raises:
            AlertStateError: If the alert was already dispatched
        """
        now = dispatchTime or self._clock()
        alert.markDispatched(now)

        responseMs = calculateResponseMs(alert.createdAt, now)
        slaMet = checkSlaCompliance(alert.riskLevel, responseMs, self._deadlinesMs)

        record = DispatchRecord(
            dispatchedAt=now,
            riskLevel=alert.riskLevel,
            subjectId=alert.subjectId,
            vitalKind=alert.vitalKind,
            message=alert.message,
            responseMs=responseMs,
            slaMet=slaMet,
            responseAction=RESPONSE_ACTIONS[alert.riskLevel],
        )

        with self._lock:
            self._stats.alertsDispatched += 1
            levelName = alert.riskLevel.name
            self._stats.dispatchedByLevel[levelName] = \
                self._stats.dispatchedByLevel.get(levelName, 0) + 1
            self._stats.lastDispatchTime = now
            if not slaMet:
                self._stats.slaBreaches += 1

        self._logRecord(record)
        self._triggerCallbacks(record)
        return record

    def dispatchAll(
        self,
        queue: AlertQueue,
        dispatchTime: Optional[datetime] = None,
        errors: Optional[ErrorCollector] = None
    ) -> List[DispatchRecord]:
        """
        Dispatch every pending alert in priority order.

        Alerts are popped one at a time, so an alert stays queued until its
        own dispatch starts. An alert whose dispatch raises is logged,
        counted and added to ``errors``; the remaining alerts are still
        dispatched.

        Args:
            queue: Queue to drain
            dispatchTime: Fixed dispatch timestamp (clock is used per alert when omitted)
            errors: Collector for dispatch failures

        Returns:
            Dispatch records in dispatch order
        """
        records: List[DispatchRecord] = []
        while True:
            alert = queue.popHighest()
            if alert is None:
                break
            try:
                records.append(self.dispatch(alert, dispatchTime))
            except Exception as e:
                logger.error(
                    f"Dispatch failed | subject={alert.subjectId} | "
                    f"level={alert.riskLevel.name} | {e}"
                )
                with self._lock:
                    self._stats.dispatchFailures += 1
                if errors is not None:
                    errors.add(e, subjectId=alert.subjectId, level=alert.riskLevel.name)
        return records

    def recordSuppressed(self, count: int = 1) -> None:
        """Count candidate alerts dropped by the false-alarm filter."""
        with self._lock:
            self._stats.falseAlarmsSuppressed += count

    def _logRecord(self, record: DispatchRecord) -> None:
        """
        Log a dispatch record.

        Args:
            record: Record to log
        """
        marker = "SLA met" if record.slaMet else "SLA MISSED"
        message = (
            f"[{record.riskLevel.name}] Subject {record.subjectId}: {record.message} "
            f"(response={record.responseMs}ms, {marker}) -> {record.responseAction}"
        )
        if record.slaMet:
            logger.info(message)
        else:
            logger.warning(
                f"{message} | deadline={self._deadlinesMs[record.riskLevel]}ms"
            )

    def _triggerCallbacks(self, record: DispatchRecord) -> None:
        """
        Trigger all registered callbacks.

        Args:
            record: The dispatch record
        """
        for callback in self._onDispatchCallbacks:
            try:
                callback(record)
            except Exception as e:
                logger.error(f"Dispatch callback error: {e}")

    # ================================================================================
    # Statistics
    # ================================================================================

    def getStats(self) -> AlertStats:
        """
        Get dispatch statistics.

        Returns:
            Copy of the current AlertStats
        """
        with self._lock:
            return AlertStats(
                alertsDispatched=self._stats.alertsDispatched,
                falseAlarmsSuppressed=self._stats.falseAlarmsSuppressed,
                slaBreaches=self._stats.slaBreaches,
                dispatchFailures=self._stats.dispatchFailures,
                dispatchedByLevel=self._stats.dispatchedByLevel.copy(),
                lastDispatchTime=self._stats.lastDispatchTime,
            )

    def resetStats(self) -> None:
        """Reset statistics."""
        with self._lock:
            self._stats = AlertStats()
