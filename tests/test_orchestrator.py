################################################################################
# File Name: test_orchestrator.py
# Purpose/Description: Unit tests for SchedulingOrchestrator class
# Author: Ralph Agent
# Creation Date: 2026-10-14
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-14    | Ralph Agent  | Initial implementation
# 2026-10-15    | Ralph Agent  | Add source polling and error collection tests
# 2026-10-19    | M. Cornelison | Dispatch failure, dual-alert and threaded ingestion tests
# ================================================================================
################################################################################

"""
Unit tests for the SchedulingOrchestrator class.

Test coverage includes:
- Subject registration and lookup
- Reading ingestion: classification, false-alarm filtering, trend alerts
- Emergency injection
- Monitoring cycles with explicit readings and attached sources
- Error collection during cycles
- Statistics and subject summaries
- Callback notification

Usage:
    pytest tests/test_orchestrator.py -v
"""

import threading
from unittest.mock import MagicMock

import pytest

from alert.types import AlertState
from scheduler import (
    DuplicateSubjectError,
    EmergencyKind,
    ScriptedReadingSource,
    UnknownSubjectError,
    formatReadingMessage,
    formatTrendMessage,
)
from scheduler.sources import ReadingSource
from vitals.exceptions import SubjectValidationError
from vitals.types import NormalRange, Reading, RiskLevel, VitalKind

MEDIUM_STABLE_HR = [105, 106, 104, 105, 105, 106, 104, 105, 106, 105]


class FailingSource(ReadingSource):
    """Source whose read always raises."""

    def isActive(self) -> bool:
        return True

    def readReading(self):
        raise RuntimeError("sensor disconnected")


# ================================================================================
# Registration
# ================================================================================

class TestSubjectRegistration:
    """Tests for registerSubject/getSubject."""

    def test_registerSubject_valid_returnsRecord(self, orchestrator):
        """
        Given: Empty orchestrator
        When: registerSubject() is called
        Then: Subject is retrievable and counted
        """
        record = orchestrator.registerSubject(1, "John Doe", 45)

        assert orchestrator.getSubject(1) is record
        assert orchestrator.hasSubject(1) is True
        assert orchestrator.getStatistics().subjectCount == 1

    def test_registerSubject_duplicateId_raisesDuplicateSubjectError(self, orchestrator):
        """
        Given: Subject 1 registered
        When: Subject 1 is registered again
        Then: DuplicateSubjectError is raised and the first record is kept
        """
        first = orchestrator.registerSubject(1, "John Doe", 45)

        with pytest.raises(DuplicateSubjectError) as excInfo:
            orchestrator.registerSubject(1, "Jane Smith", 67)

        assert excInfo.value.subjectId == 1
        assert orchestrator.getSubject(1) is first

    def test_registerSubject_invalidAge_raisesSubjectValidationError(self, orchestrator):
        """
        Given: Age 200
        When: registerSubject() is called
        Then: SubjectValidationError is raised and nothing is registered
        """
        with pytest.raises(SubjectValidationError):
            orchestrator.registerSubject(1, "John Doe", 200)

        assert orchestrator.hasSubject(1) is False

    def test_getSubject_unknown_raisesUnknownSubjectError(self, orchestrator):
        """
        Given: No subjects
        When: getSubject(99) is called
        Then: UnknownSubjectError is raised
        """
        with pytest.raises(UnknownSubjectError):
            orchestrator.getSubject(99)


# ================================================================================
# Ingestion
# ================================================================================

class TestProcessReading:
    """Tests for processReading."""

    def test_processReading_criticalHeartRate_queuesOneAlert(self, orchestrator, fakeClock):
        """
        Given: Registered subject with no history
        When: Heart rate 220 is processed
        Then: One CRITICAL alert is queued with the formatted message
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        alerts = orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 220))

        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.riskLevel == RiskLevel.CRITICAL
        assert alert.message == "Heart Rate reading: 220 (Priority: 1)"
        assert alert.createdAt == fakeClock()
        assert alert.isTrend is False
        assert orchestrator.queue.size() == 1

    def test_processReading_normalValue_queuesNothing(self, orchestrator):
        """
        Given: Registered subject
        When: Heart rate 75 is processed
        Then: No alert; the reading is kept and the risk recorded
        """
        record = orchestrator.registerSubject(1, "John Doe", 45)

        assert orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 75)) == []
        assert record.historyLength(VitalKind.HEART_RATE) == 1
        assert record.currentRisk == RiskLevel.LOW

    def test_processReading_unknownSubject_droppedAndCounted(self, orchestrator):
        """
        Given: No subject 42
        When: A reading for subject 42 is processed
        Then: Nothing is queued and the drop is counted
        """
        alerts = orchestrator.processReading(Reading(42, VitalKind.HEART_RATE, 220))

        stats = orchestrator.getStatistics()
        assert alerts == []
        assert stats.readingsDropped == 1
        assert stats.readingsProcessed == 0
        assert orchestrator.queue.hasPending() is False

    def test_processReading_subjectRange_usedForClassification(self, orchestrator):
        """
        Given: Subject whose normal heart rate range is 50-70
        When: Heart rate 80 is processed
        Then: A MEDIUM alert is queued
        """
        orchestrator.registerSubject(
            1, "John Doe", 45, normalRanges={VitalKind.HEART_RATE: NormalRange(50, 70)}
        )

        alerts = orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 80))

        assert [a.riskLevel for a in alerts] == [RiskLevel.MEDIUM]

    def test_processReading_stableMediumWindow_suppressesFalseAlarms(self, orchestrator, makeReadings):
        """
        Given: Ten MEDIUM heart rate readings that barely vary
        When: They are processed in order
        Then: The first four alert (too little history), the rest are suppressed
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        created = []
        for reading in makeReadings(1, VitalKind.HEART_RATE, MEDIUM_STABLE_HR):
            created.extend(orchestrator.processReading(reading))

        stats = orchestrator.getStatistics()
        assert len(created) == 4
        assert stats.falseAlarmsSuppressed == 6
        assert stats.alertsCreated == 4
        assert stats.trendAlerts == 0

    def test_processReading_spikeAfterStableHistory_notSuppressed(self, orchestrator, makeReadings):
        """
        Given: Nine normal heart rate readings
        When: Heart rate 200 follows
        Then: The CRITICAL alert survives the filter
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        for reading in makeReadings(1, VitalKind.HEART_RATE, [75, 75, 76, 74, 75, 76, 74, 75, 75]):
            orchestrator.processReading(reading)

        alerts = orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 200))

        assert [a.riskLevel for a in alerts] == [RiskLevel.CRITICAL]
        assert orchestrator.getStatistics().falseAlarmsSuppressed == 0

    def test_processReading_risingTrend_queuesTrendAlert(self, orchestrator, makeReadings):
        """
        Given: Heart rate rising 3 per reading while staying normal
        When: The fifth reading is processed
        Then: A MEDIUM trend alert is queued
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        readings = makeReadings(1, VitalKind.HEART_RATE, [70, 73, 76, 79, 82])

        for reading in readings[:4]:
            assert orchestrator.processReading(reading) == []
        alerts = orchestrator.processReading(readings[4])

        assert len(alerts) == 1
        assert alerts[0].isTrend is True
        assert alerts[0].riskLevel == RiskLevel.MEDIUM
        assert alerts[0].message == formatTrendMessage(VitalKind.HEART_RATE)
        assert orchestrator.getStatistics().trendAlerts == 1

    def test_processReading_outOfRangeDuringTrend_queuesBothAlerts(self, orchestrator, makeReadings):
        """
        Given: Four heart rate readings of 100
        When: A fifth reading of 130 is processed
        Then: A HIGH classifier alert and a MEDIUM trend alert are both queued
              and dispatch in that order
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        readings = makeReadings(1, VitalKind.HEART_RATE, [100, 100, 100, 100, 130])

        for reading in readings[:4]:
            assert orchestrator.processReading(reading) == []
        alerts = orchestrator.processReading(readings[4])

        assert [(a.riskLevel, a.isTrend) for a in alerts] == [
            (RiskLevel.HIGH, False),
            (RiskLevel.MEDIUM, True),
        ]
        records = orchestrator.drainNow()
        assert [r.message for r in records] == [
            formatReadingMessage(VitalKind.HEART_RATE, 130, RiskLevel.HIGH),
            formatTrendMessage(VitalKind.HEART_RATE),
        ]
        assert orchestrator.getStatistics().falseAlarmsSuppressed == 0

    def test_processReading_steadyHighTemperature_neverSuppressed(self, orchestrator, makeReadings):
        """
        Given: Ten temperature readings of 39.3 (HIGH, constant)
        When: They are processed
        Then: Every reading queues a HIGH alert and none is filtered
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        queued = []
        for reading in makeReadings(1, VitalKind.TEMPERATURE, [39.3] * 10):
            queued.extend(orchestrator.processReading(reading))

        assert [a.riskLevel for a in queued] == [RiskLevel.HIGH] * 10
        assert orchestrator.getStatistics().falseAlarmsSuppressed == 0

    def test_processReading_unclassifiableValue_collectedNotRaised(self, orchestrator):
        """
        Given: A reading whose value is not numeric
        When: processReading() is called directly
        Then: Returns no alerts, collects a DATA error and counts the drop
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        alerts = orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, "not-a-number"))

        assert alerts == []
        assert orchestrator.errors.countByCategory() == {"data": 1}
        assert orchestrator.getStatistics().readingsDropped == 1
        assert orchestrator.getSubject(1).getHistory(VitalKind.HEART_RATE) == []

    def test_formatReadingMessage_fractionalValue_truncates(self):
        """
        Given: SpO2 value 84.9 at HIGH
        When: formatReadingMessage() is called
        Then: The value is truncated toward zero
        """
        message = formatReadingMessage(VitalKind.OXYGEN_SATURATION, 84.9, RiskLevel.HIGH)

        assert message.endswith("reading: 84 (Priority: 2)")

    def test_onAlert_callbacks_receiveQueuedAlerts(self, orchestrator):
        """
        Given: A failing and a recording onAlert callback
        When: A CRITICAL reading is processed
        Then: The recording callback still receives the alert
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        failing = MagicMock(side_effect=RuntimeError("pager down"))
        received = MagicMock()
        orchestrator.onAlert(failing)
        orchestrator.onAlert(received)

        alerts = orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 220))

        received.assert_called_once_with(alerts[0])


# ================================================================================
# Emergencies
# ================================================================================

class TestInjectEmergency:
    """Tests for injectEmergency."""

    @pytest.mark.parametrize("kind,vitalKind,expected", [
        (EmergencyKind.CARDIAC_ARREST, VitalKind.HEART_RATE, RiskLevel.CRITICAL),
        (EmergencyKind.RESPIRATORY_FAILURE, VitalKind.OXYGEN_SATURATION, RiskLevel.CRITICAL),
        (EmergencyKind.HYPERTENSIVE_CRISIS, VitalKind.BLOOD_PRESSURE, RiskLevel.CRITICAL),
        (EmergencyKind.HYPOTHERMIA, VitalKind.TEMPERATURE, RiskLevel.HIGH),
    ])
    def test_injectEmergency_eachKind_queuesExpectedLevel(self, orchestrator, kind, vitalKind, expected):
        """
        Given: Registered subject
        When: An emergency is injected
        Then: One alert for the scenario's vital is queued, not yet dispatched
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        alerts = orchestrator.injectEmergency(1, kind)

        assert len(alerts) == 1
        assert alerts[0].vitalKind == vitalKind
        assert alerts[0].riskLevel == expected
        assert alerts[0].state == AlertState.CREATED
        assert orchestrator.getStatistics().alertsDispatched == 0

    def test_injectEmergency_unknownSubject_raisesUnknownSubjectError(self, orchestrator):
        """
        Given: No subject 7
        When: injectEmergency(7, ...) is called
        Then: UnknownSubjectError is raised
        """
        with pytest.raises(UnknownSubjectError):
            orchestrator.injectEmergency(7, EmergencyKind.CARDIAC_ARREST)


# ================================================================================
# Cycles
# ================================================================================

class TestRunCycle:
    """Tests for runCycle and drainNow."""

    def test_runCycle_explicitReadings_dispatchesInPriorityOrder(self, orchestrator):
        """
        Given: Two subjects
        When: A cycle ingests a HIGH then a CRITICAL reading
        Then: CRITICAL is dispatched first and the queue is empty
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.registerSubject(2, "Jane Smith", 67)

        records = orchestrator.runCycle([
            Reading(1, VitalKind.BLOOD_PRESSURE, 170),
            Reading(2, VitalKind.HEART_RATE, 220),
        ])

        assert [(r.subjectId, r.riskLevel) for r in records] == [
            (2, RiskLevel.CRITICAL),
            (1, RiskLevel.HIGH),
        ]
        assert all(r.slaMet for r in records)
        assert orchestrator.queue.hasPending() is False

    def test_runCycle_summary_countsReadingsAndDrops(self, orchestrator):
        """
        Given: One registered subject
        When: A cycle ingests two known and one unknown reading
        Then: lastCycle reports 2 processed, 1 dropped
        """
        orchestrator.registerSubject(1, "John Doe", 45)

        orchestrator.runCycle([
            Reading(1, VitalKind.HEART_RATE, 75),
            Reading(9, VitalKind.HEART_RATE, 75),
            Reading(1, VitalKind.HEART_RATE, 200),
        ])

        summary = orchestrator.lastCycle
        assert summary.cycleNumber == 1
        assert summary.readingsProcessed == 2
        assert summary.readingsDropped == 1
        assert summary.alertsDispatched == 1
        assert summary.dispatchedByLevel == {'CRITICAL': 1}
        assert orchestrator.getStatistics().cyclesCompleted == 1

    def test_runCycle_noReadings_pollsAttachedSources(self, orchestrator):
        """
        Given: Scripted source with two readings attached
        When: Two cycles run without explicit readings
        Then: One reading is consumed per cycle and the source goes inactive
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        source = ScriptedReadingSource([
            Reading(1, VitalKind.HEART_RATE, 220),
            Reading(1, VitalKind.HEART_RATE, 75),
        ])
        orchestrator.attachSource(source)

        first = orchestrator.runCycle()
        second = orchestrator.runCycle()

        assert len(first) == 1
        assert second == []
        assert source.isActive() is False
        assert orchestrator.getStatistics().readingsProcessed == 2

    def test_runCycle_failingSource_collectsErrorAndContinues(self, orchestrator):
        """
        Given: A failing source and a working source
        When: A cycle runs
        Then: The error is collected and the other reading is processed
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.attachSource(FailingSource())
        orchestrator.attachSource(ScriptedReadingSource([Reading(1, VitalKind.HEART_RATE, 220)]))

        records = orchestrator.runCycle()

        assert len(records) == 1
        assert orchestrator.errors.count() == 1
        assert orchestrator.lastCycle.errorCount == 1

    def test_runCycle_processingError_collectedAndCycleContinues(self, orchestrator):
        """
        Given: A reading whose value is not numeric
        When: A cycle ingests it with a valid reading
        Then: The bad reading is dropped with a DATA error, the valid one dispatched
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        bad = Reading(1, VitalKind.HEART_RATE, "not-a-number")

        records = orchestrator.runCycle([bad, Reading(1, VitalKind.HEART_RATE, 220)])

        assert len(records) == 1
        assert orchestrator.errors.count() == 1
        assert orchestrator.lastCycle.readingsDropped == 1
        assert orchestrator.errors.countByCategory() == {"data": 1}
        assert orchestrator.getStatistics().readingsDropped == 1
        assert [r.value for r in orchestrator.getSubject(1).getHistory(VitalKind.HEART_RATE)] == [220]

    def test_runCycle_dispatchFailure_collectedAndRestDispatched(self, orchestrator):
        """
        Given: An already dispatched alert pushed back onto the queue
        When: A cycle ingests a HIGH heart rate reading
        Then: The HIGH alert is dispatched, the failure is collected, nothing raises
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 220))
        stale = orchestrator.queue.peek()
        orchestrator.drainNow()
        orchestrator.queue.push(stale)

        records = orchestrator.runCycle([Reading(1, VitalKind.HEART_RATE, 130)])

        assert [r.riskLevel for r in records] == [RiskLevel.HIGH]
        assert orchestrator.queue.hasPending() is False
        assert orchestrator.errors.count() == 1
        assert orchestrator.lastCycle.errorCount == 1
        assert orchestrator.dispatcher.getStats().dispatchFailures == 1

    def test_drainNow_responseTime_measuredWithClock(self, orchestrator, fakeClock):
        """
        Given: CRITICAL alert queued, clock advanced 3 seconds
        When: drainNow() is called
        Then: responseMs is 3000 and the SLA is missed
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.processReading(Reading(1, VitalKind.HEART_RATE, 220))
        fakeClock.advance(seconds=3)

        records = orchestrator.drainNow()

        assert records[0].responseMs == 3000
        assert records[0].slaMet is False
        assert orchestrator.getStatistics().slaBreaches == 1

    def test_detachSource_attached_stopsPolling(self, orchestrator):
        """
        Given: Attached source
        When: detachSource() is called twice
        Then: True then False; device count drops to 0
        """
        source = ScriptedReadingSource([])
        orchestrator.attachSource(source)

        assert orchestrator.getStatistics().deviceCount == 1
        assert orchestrator.detachSource(source) is True
        assert orchestrator.detachSource(source) is False
        assert orchestrator.getStatistics().deviceCount == 0


# ================================================================================
# Statistics
# ================================================================================

class TestConcurrentIngestion:
    """Tests for ingestion and draining from several threads."""

    def test_processReading_manyThreads_nothingLostOrDuplicated(self, orchestrator, fakeClock):
        """
        Given: Eight threads sharing subject 1 and spread over subjects 2-4
        When: They ingest readings while another thread keeps draining
        Then: Windows stay bounded, every queued alert is dispatched exactly
              once, and the final drain is in priority order
        """
        for subjectId in range(1, 5):
            orchestrator.registerSubject(subjectId, f"Subject {subjectId}", 40)
        values = [75, 220, 130, 45, 95, 105]
        threadCount = 8
        perThread = 40
        barrier = threading.Barrier(threadCount + 1)
        producersDone = threading.Event()
        dispatched = []

        def produce(index: int) -> None:
            barrier.wait()
            for k in range(perThread):
                value = values[(index + k) % len(values)]
                orchestrator.processReading(
                    Reading(1, VitalKind.HEART_RATE, value, timestamp=fakeClock())
                )
                orchestrator.processReading(
                    Reading(index % 3 + 2, VitalKind.HEART_RATE, value, timestamp=fakeClock())
                )

        def drain() -> None:
            barrier.wait()
            while not producersDone.is_set():
                dispatched.extend(orchestrator.drainNow())

        producers = [threading.Thread(target=produce, args=(i,)) for i in range(threadCount)]
        drainer = threading.Thread(target=drain)
        for thread in producers + [drainer]:
            thread.start()
        for thread in producers:
            thread.join()
        producersDone.set()
        drainer.join()

        pendingBeforeFinal = orchestrator.queue.size()
        finalRecords = orchestrator.drainNow()
        dispatched.extend(finalRecords)
        stats = orchestrator.getStatistics()

        assert len(finalRecords) == pendingBeforeFinal
        finalKeys = [r.riskLevel.value for r in finalRecords]
        assert finalKeys == sorted(finalKeys)

        assert orchestrator.getSubject(1).historyLength(VitalKind.HEART_RATE) == 100
        assert orchestrator.getSubject(2).historyLength(VitalKind.HEART_RATE) == 100
        assert orchestrator.getSubject(3).historyLength(VitalKind.HEART_RATE) == 100
        assert orchestrator.getSubject(4).historyLength(VitalKind.HEART_RATE) == 80

        assert stats.readingsProcessed == threadCount * perThread * 2
        assert orchestrator.queue.totalPushed == stats.alertsCreated
        assert len(dispatched) == stats.alertsCreated
        assert stats.alertsDispatched == stats.alertsCreated
        assert stats.pendingAlerts == 0
        assert orchestrator.errors.count() == 0


class TestStatistics:
    """Tests for getStatistics/getSubjectSummaries."""

    def test_getStatistics_afterCycle_reportsTotals(self, orchestrator):
        """
        Given: One subject and a cycle with one CRITICAL reading
        When: getStatistics() is called
        Then: Totals reflect the cycle
        """
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.runCycle([Reading(1, VitalKind.HEART_RATE, 220)])

        stats = orchestrator.getStatistics().toDict()

        assert stats['subjectCount'] == 1
        assert stats['alertsDispatched'] == 1
        assert stats['alertsCreated'] == 1
        assert stats['pendingAlerts'] == 0
        assert stats['cyclesCompleted'] == 1

    def test_getSubjectSummaries_multipleSubjects_sortedById(self, orchestrator):
        """
        Given: Subjects registered as 3 then 1
        When: getSubjectSummaries() is called
        Then: Summaries are ordered by id
        """
        orchestrator.registerSubject(3, "Bob Johnson", 34)
        orchestrator.registerSubject(1, "John Doe", 45)
        orchestrator.processReading(Reading(3, VitalKind.HEART_RATE, 200))

        summaries = orchestrator.getSubjectSummaries()

        assert [s['subjectId'] for s in summaries] == [1, 3]
        assert summaries[1]['currentRisk'] == 'CRITICAL'
