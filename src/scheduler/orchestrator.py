################################################################################
# File Name: orchestrator.py
# Purpose/Description: Central orchestrator for the vital-sign alert pipeline
# Author: Ralph Agent
# Creation Date: 2026-01-23
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-23    | Ralph Agent  | Initial implementation for US-OSC-001
# 2026-01-23    | Ralph Agent  | US-OSC-005: Main loop with exception handling
# 2026-10-13    | M. Cornelison | Rebuilt around subject registry, reading
#               |              | ingestion, alert queue and dispatch cycle
# 2026-10-15    | M. Cornelison | Emergency injection and subject summaries
# 2026-10-19    | M. Cornelison | Collect ingestion and dispatch failures
# ================================================================================
################################################################################

"""
Scheduling orchestrator for the vital-sign alert pipeline.

This module provides the SchedulingOrchestrator class that ties the
components together. It handles:

- Subject registration and per-subject reading history
- Reading ingestion: classify, filter false alarms, detect trends, enqueue
- Monitoring cycles: poll attached sources, then drain and dispatch the queue
- Emergency injection through the normal ingestion path
- Aggregate statistics

Components used:
- vitals.classifier: classifyRisk for the risk of each reading
- analysis.false_alarm: FalseAlarmFilter for z-score suppression
- analysis.trend: TrendDetector for sustained drift
- alert.queue: AlertQueue for priority ordering
- alert.dispatcher: AlertDispatcher for SLA tracking

Usage:
    from scheduler import SchedulingOrchestrator

    orchestrator = SchedulingOrchestrator()
    orchestrator.registerSubject(1, "John Doe", 45)
    orchestrator.attachSource(device)

    records = orchestrator.runCycle()
    stats = orchestrator.getStatistics()
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from alert.dispatcher import AlertDispatcher
from alert.queue import AlertQueue
from alert.types import Alert, DispatchRecord
from analysis.false_alarm import FalseAlarmFilter
from analysis.trend import TrendDetector
from common.error_handler import ErrorCollector
from vitals.classifier import classifyRisk
from vitals.history import SubjectRecord
from vitals.types import (
    DEFAULT_HISTORY_CAPACITY,
    NormalRange,
    Reading,
    RiskLevel,
    VitalKind,
    getVitalDisplayName,
)

from .emergency import EmergencyKind, createEmergencyReading
from .exceptions import DuplicateSubjectError, UnknownSubjectError
from .sources import ReadingSource
from .types import DEFAULT_FILTER_WINDOW, CycleSummary, SystemStatistics

logger = logging.getLogger(__name__)


def formatReadingMessage(vitalKind: VitalKind, value: float, riskLevel: RiskLevel) -> str:
    """Alert text for an out-of-range reading; the value is truncated."""
    return f"{getVitalDisplayName(vitalKind)} reading: {int(value)} (Priority: {riskLevel.value})"


def formatTrendMessage(vitalKind: VitalKind) -> str:
    """Alert text for a sustained drift."""
    return f"Concerning trend detected in {getVitalDisplayName(vitalKind)}"


class SchedulingOrchestrator:
    """
    Central coordinator for reading ingestion and alert dispatch.

    Locking:
        Each subject carries its own lock, held while a reading is appended,
        classified, filtered and trend-checked. The queue has its own lock,
        so drains see either all or none of a reading's alerts.

    Example:
        orchestrator = SchedulingOrchestrator(clock=fakeClock)
        orchestrator.registerSubject(1, "Jane Smith", 67)
        orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 200))
        records = orchestrator.drainNow()
    """

    def __init__(
        self,
        queue: Optional[AlertQueue] = None,
        dispatcher: Optional[AlertDispatcher] = None,
        falseAlarmFilter: Optional[FalseAlarmFilter] = None,
        trendDetector: Optional[TrendDetector] = None,
        historyCapacity: int = DEFAULT_HISTORY_CAPACITY,
        filterWindow: int = DEFAULT_FILTER_WINDOW,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize the orchestrator.

        Args:
            queue: Alert queue (a default queue is created when omitted)
            dispatcher: Alert dispatcher (created with the same clock when omitted)
            falseAlarmFilter: False-alarm filter (default thresholds when omitted)
            trendDetector: Trend detector (default window when omitted)
            historyCapacity: Readings kept per subject and vital
            filterWindow: Most recent readings handed to the filter
            clock: Source of alert creation timestamps
        """
        self._clock = clock
        self._queue = queue or AlertQueue()
        self._dispatcher = dispatcher or AlertDispatcher(clock=clock)
        self._filter = falseAlarmFilter or FalseAlarmFilter()
        self._trendDetector = trendDetector or TrendDetector()
        self._historyCapacity = historyCapacity
        self._filterWindow = filterWindow

        self._subjects: Dict[int, SubjectRecord] = {}
        self._sources: List[ReadingSource] = []
        self._registryLock = threading.Lock()

        self._statsLock = threading.Lock()
        self._alertsCreated = 0
        self._trendAlerts = 0
        self._readingsProcessed = 0
        self._readingsDropped = 0
        self._cyclesCompleted = 0
        self._lastCycle: Optional[CycleSummary] = None

        self._errors = ErrorCollector()
        self._onAlertCallbacks: list[Callable[[Alert], None]] = []

    # ================================================================================
    # Properties
    # ================================================================================

    @property
    def queue(self) -> AlertQueue:
        return self._queue

    @property
    def dispatcher(self) -> AlertDispatcher:
        return self._dispatcher

    @property
    def errors(self) -> ErrorCollector:
        """Errors collected while ingesting readings and dispatching alerts."""
        return self._errors

    @property
    def lastCycle(self) -> Optional[CycleSummary]:
        return self._lastCycle

    # ================================================================================
    # Subjects and Sources
    # ================================================================================

    def registerSubject(
        self,
        subjectId: int,
        name: str,
        age: int,
        normalRanges: Optional[Dict[VitalKind, NormalRange]] = None
    ) -> SubjectRecord:
        """
        Register a subject for monitoring.

        Args:
            subjectId: Unique subject id
            name: Display name
            age: Age in years
            normalRanges: Per-vital overrides of the default normal ranges

        Returns:
            The new SubjectRecord

        Raises:
            DuplicateSubjectError: If the id is already registered
            SubjectValidationError: If name, age or ranges are invalid
        """
        record = SubjectRecord(
            subjectId,
            name,
            age,
            normalRanges=normalRanges,
            historyCapacity=self._historyCapacity,
        )
        with self._registryLock:
            if subjectId in self._subjects:
                raise DuplicateSubjectError(
                    f"Subject {subjectId} is already registered",
                    subjectId=subjectId
                )
            self._subjects[subjectId] = record

        logger.info(f"Registered subject {subjectId} | age={age}")
        return record

    def getSubject(self, subjectId: int) -> SubjectRecord:
        """
        Look up a registered subject.

        Raises:
            UnknownSubjectError: If the id is not registered
        """
        with self._registryLock:
            record = self._subjects.get(subjectId)
        if record is None:
            raise UnknownSubjectError(
                f"Subject {subjectId} is not registered",
                subjectId=subjectId
            )
        return record

    def hasSubject(self, subjectId: int) -> bool:
        with self._registryLock:
            return subjectId in self._subjects

    def attachSource(self, source: ReadingSource) -> None:
        """
        Attach a reading source polled once per cycle.

        Args:
            source: Any ReadingSource
        """
        with self._registryLock:
            if source not in self._sources:
                self._sources.append(source)

    def detachSource(self, source: ReadingSource) -> bool:
        """
        Detach a reading source.

        Returns:
            True if the source was attached
        """
        with self._registryLock:
            if source in self._sources:
                self._sources.remove(source)
                return True
        return False

    def onAlert(self, callback: Callable[[Alert], None]) -> None:
        """
        Register a callback for alerts pushed to the queue.

        Args:
            callback: Function called with each queued Alert
        """
        self._onAlertCallbacks.append(callback)

    # ================================================================================
    # Ingestion
    # ================================================================================

    def processReading(self, reading: Reading) -> List[Alert]:
        """
        Ingest one reading.

        Appends the reading to the subject's history, classifies it, runs the
        false-alarm filter on non-LOW readings and the trend detector on the
        updated history. Alerts that survive are pushed to the queue.

        Readings for unregistered subjects are dropped and counted. A reading
        that fails to process is dropped, counted and added to ``errors``.

        Args:
            reading: Reading to ingest

        Returns:
            Alerts pushed to the queue (empty if none)
        """
        try:
            return self._processReading(reading)
        except Exception as e:
            self._recordIngestError(reading, e)
            return []

    def _recordIngestError(self, reading: Reading, error: Exception) -> None:
        logger.error(
            f"Error processing reading for subject {reading.subjectId}: {error}",
            exc_info=True
        )
        self._errors.add(error, subjectId=reading.subjectId, vital=reading.vitalKind.value)
        with self._statsLock:
            self._readingsDropped += 1

    def _processReading(self, reading: Reading) -> List[Alert]:
        """Ingest one reading; unexpected errors propagate to the caller."""
        with self._registryLock:
            record = self._subjects.get(reading.subjectId)

        if record is None:
            logger.debug(
                f"Dropped reading for unknown subject {reading.subjectId} "
                f"| vital={reading.vitalKind.value}"
            )
            with self._statsLock:
                self._readingsDropped += 1
            return []

        queued: List[Alert] = []
        with record.lock:
            # Classify first so an unclassifiable value never enters the history
            riskLevel = classifyRisk(reading.vitalKind, reading.value, record.normalRanges)
            record.addReading(reading)
            record.setLatestRisk(reading.vitalKind, riskLevel)

            if riskLevel != RiskLevel.LOW:
                alert = self._evaluateCandidate(record, reading, riskLevel)
                if alert is not None:
                    queued.append(alert)

            if self._trendDetector.detect(record.getHistory(reading.vitalKind)):
                trendAlert = Alert(
                    subjectId=reading.subjectId,
                    riskLevel=RiskLevel.MEDIUM,
                    message=formatTrendMessage(reading.vitalKind),
                    vitalKind=reading.vitalKind,
                    createdAt=self._clock(),
                    isTrend=True,
                )
                self._queue.push(trendAlert)
                queued.append(trendAlert)

        with self._statsLock:
            self._readingsProcessed += 1
            self._alertsCreated += len(queued)
            self._trendAlerts += sum(1 for alert in queued if alert.isTrend)

        for alert in queued:
            self._triggerCallbacks(alert)
        return queued

    def _evaluateCandidate(
        self,
        record: SubjectRecord,
        reading: Reading,
        riskLevel: RiskLevel
    ) -> Optional[Alert]:
        """
        Build a candidate alert and push it unless the filter suppresses it.

        Must be called with the subject's lock held.

        Returns:
            The queued alert, or None if suppressed
        """
        alert = Alert(
            subjectId=reading.subjectId,
            riskLevel=riskLevel,
            message=formatReadingMessage(reading.vitalKind, reading.value, riskLevel),
            vitalKind=reading.vitalKind,
            createdAt=self._clock(),
        )

        recent = record.getRecentReadings(reading.vitalKind, self._filterWindow)
        decision = self._filter.evaluate(riskLevel, recent)
        if decision.suppress:
            self._dispatcher.recordSuppressed()
            logger.info(
                f"False alarm filtered | subject={reading.subjectId} | "
                f"vital={reading.vitalKind.value} | level={riskLevel.name} | "
                f"z={decision.zScore:.2f} < {decision.threshold}"
            )
            return None

        self._queue.push(alert)
        logger.debug(
            f"Alert queued | subject={reading.subjectId} | level={riskLevel.name} | "
            f"{alert.message}"
        )
        return alert

    def _triggerCallbacks(self, alert: Alert) -> None:
        for callback in self._onAlertCallbacks:
            try:
                callback(alert)
            except Exception as e:
                logger.warning(f"onAlert callback error: {e}")

    def injectEmergency(self, subjectId: int, emergencyKind: EmergencyKind) -> List[Alert]:
        """
        Inject an emergency reading for a subject.

        The reading goes through the normal ingestion path; it is not
        dispatched until the next drain.

        Args:
            subjectId: Registered subject id
            emergencyKind: Scenario to simulate

        Returns:
            Alerts pushed to the queue

        Raises:
            UnknownSubjectError: If the subject is not registered
        """
        if not self.hasSubject(subjectId):
            raise UnknownSubjectError(
                f"Cannot inject emergency: subject {subjectId} is not registered",
                subjectId=subjectId
            )

        reading = createEmergencyReading(emergencyKind, subjectId, self._clock())
        logger.warning(
            f"Emergency injected | subject={subjectId} | kind={emergencyKind.value} | "
            f"{reading.vitalKind.value}={reading.value}"
        )
        return self.processReading(reading)

    # ================================================================================
    # Cycles
    # ================================================================================

    def runCycle(self, readings: Optional[Iterable[Reading]] = None) -> List[DispatchRecord]:
        """
        Run one monitoring cycle.

        Ingests the given readings, or polls every active attached source
        once, then drains the queue and dispatches in priority order. An
        unexpected error on one reading is collected and logged; the cycle
        continues.

        Args:
            readings: Readings to ingest instead of polling sources

        Returns:
            Dispatch records in dispatch order
        """
        with self._statsLock:
            cycleNumber = self._cyclesCompleted + 1
        summary = CycleSummary(cycleNumber=cycleNumber, startedAt=self._clock())
        logger.debug(f"Cycle {cycleNumber} started")

        if readings is None:
            readings = self._pollSources(summary)

        for reading in readings:
            self._ingest(reading, summary)

        errorsBefore = self._errors.count()
        records = self.drainNow()
        summary.errorCount += self._errors.count() - errorsBefore

        summary.alertsDispatched = len(records)
        summary.slaBreaches = sum(1 for record in records if not record.slaMet)
        for record in records:
            levelName = record.riskLevel.name
            summary.dispatchedByLevel[levelName] = summary.dispatchedByLevel.get(levelName, 0) + 1
        summary.completedAt = self._clock()

        with self._statsLock:
            self._cyclesCompleted += 1
            self._lastCycle = summary

        logger.info(
            f"Cycle {cycleNumber} complete | readings={summary.readingsProcessed} | "
            f"dropped={summary.readingsDropped} | dispatched={summary.alertsDispatched} | "
            f"slaBreaches={summary.slaBreaches}"
        )
        return records

    def _pollSources(self, summary: CycleSummary) -> List[Reading]:
        """Poll each active source once."""
        with self._registryLock:
            sources = list(self._sources)

        readings: List[Reading] = []
        for source in sources:
            try:
                if not source.isActive():
                    continue
                reading = source.readReading()
            except Exception as e:
                logger.error(f"Reading source error: {e}")
                self._errors.add(e, source=type(source).__name__)
                summary.errorCount += 1
                continue
            if reading is not None:
                readings.append(reading)
        return readings

    def _ingest(self, reading: Reading, summary: CycleSummary) -> None:
        """Process one reading inside a cycle, collecting unexpected errors."""
        try:
            known = self.hasSubject(reading.subjectId)
            self._processReading(reading)
        except Exception as e:
            self._recordIngestError(reading, e)
            summary.errorCount += 1
            summary.readingsDropped += 1
            return

        if known:
            summary.readingsProcessed += 1
        else:
            summary.readingsDropped += 1

    def drainNow(self) -> List[DispatchRecord]:
        """
        Drain the queue immediately and dispatch every pending alert.

        An alert whose dispatch fails is added to ``errors``; the rest are
        still dispatched.

        Returns:
            Dispatch records in dispatch order
        """
        return self._dispatcher.dispatchAll(self._queue, self._clock(), errors=self._errors)

    # ================================================================================
    # Statistics
    # ================================================================================

    def getStatistics(self) -> SystemStatistics:
        """
        Get aggregate statistics.

        Returns:
            SystemStatistics snapshot
        """
        dispatchStats = self._dispatcher.getStats()
        with self._registryLock:
            subjectCount = len(self._subjects)
            deviceCount = len(self._sources)

        with self._statsLock:
            return SystemStatistics(
                subjectCount=subjectCount,
                deviceCount=deviceCount,
                alertsDispatched=dispatchStats.alertsDispatched,
                falseAlarmsSuppressed=dispatchStats.falseAlarmsSuppressed,
                alertsCreated=self._alertsCreated,
                trendAlerts=self._trendAlerts,
                slaBreaches=dispatchStats.slaBreaches,
                readingsProcessed=self._readingsProcessed,
                readingsDropped=self._readingsDropped,
                cyclesCompleted=self._cyclesCompleted,
                pendingAlerts=self._queue.size(),
            )

    def getSubjectSummaries(self) -> List[Dict[str, Any]]:
        """
        Summarize every registered subject, ordered by id.

        Returns:
            List of dictionaries with id, name, age, current risk and
            per-vital reading counts
        """
        with self._registryLock:
            records = sorted(self._subjects.values(), key=lambda r: r.subjectId)

        summaries = []
        for record in records:
            with record.lock:
                summaries.append(record.toDict())
        return summaries
