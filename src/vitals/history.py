################################################################################
# File Name: history.py
# Purpose/Description: Bounded reading windows and subject records
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# 2026-10-14    | M. Cornelison | Track latest risk per vital for subject summary
# ================================================================================
################################################################################
"""
Bounded reading windows and subject records.

Provides:
- ReadingWindow: FIFO window of readings for one (subject, vital) pair
- SubjectRecord: A monitored subject with its normal ranges and windows

Each SubjectRecord owns its windows exclusively. The scheduling orchestrator
is the only writer; it holds ``record.lock`` while appending and classifying
so concurrent readings for the same subject cannot interleave.

Usage:
    record = SubjectRecord(subjectId=1, name='John Doe', age=45)
    record.addReading(reading)
    recent = record.getRecentReadings(VitalKind.HEART_RATE, count=10)
"""

import threading
from collections import deque
from typing import Any, Deque, Dict, Iterator, List, Optional

from .exceptions import SubjectValidationError
from .types import (
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_NORMAL_RANGES,
    NormalRange,
    Reading,
    RiskLevel,
    VitalKind,
)

# Accepted subject ages (years)
MIN_SUBJECT_AGE = 0
MAX_SUBJECT_AGE = 130


# ================================================================================
# Reading Window
# ================================================================================

class ReadingWindow:
    """
    Bounded, ordered window of readings (oldest first).

    Appending beyond capacity drops the oldest reading.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Window capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._readings: Deque[Reading] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, reading: Reading) -> Optional[Reading]:
        """
        Append a reading.

        Args:
            reading: Reading to append

        Returns:
            The evicted reading if the window was full, None otherwise
        """
        evicted = None
        if len(self._readings) == self._capacity:
            evicted = self._readings[0]
        self._readings.append(reading)
        return evicted

    def recent(self, count: int) -> List[Reading]:
        """Return up to ``count`` most recent readings, oldest first."""
        if count <= 0:
            return []
        return list(self._readings)[-count:]

    def values(self) -> List[float]:
        return [r.value for r in self._readings]

    def latest(self) -> Optional[Reading]:
        return self._readings[-1] if self._readings else None

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(list(self._readings))


# ================================================================================
# Subject Record
# ================================================================================

class SubjectRecord:
    """
    A monitored subject.

    Attributes:
        subjectId: Stable integer id
        name: Display name
        age: Age in years
        normalRanges: Normal range per vital (defaults merged with overrides)
        lock: Serializes ingestion for this subject
    """

    def __init__(
        self,
        subjectId: int,
        name: str,
        age: int,
        normalRanges: Optional[Dict[VitalKind, NormalRange]] = None,
        historyCapacity: int = DEFAULT_HISTORY_CAPACITY
    ):
        """
        Initialize the subject record.

        Args:
            subjectId: Stable integer id
            name: Display name
            age: Age in years
            normalRanges: Per-vital overrides of the default normal ranges
            historyCapacity: Capacity of each per-vital window

        Raises:
            SubjectValidationError: If name, age or a range override is invalid
        """
        if not name or not name.strip():
            raise SubjectValidationError(
                "Subject name must not be empty",
                details={'subjectId': subjectId}
            )
        if not MIN_SUBJECT_AGE <= age <= MAX_SUBJECT_AGE:
            raise SubjectValidationError(
                f"Subject age must be between {MIN_SUBJECT_AGE} and {MAX_SUBJECT_AGE}",
                details={'subjectId': subjectId, 'age': age}
            )

        self.subjectId = subjectId
        self.name = name.strip()
        self.age = age
        self.normalRanges: Dict[VitalKind, NormalRange] = dict(DEFAULT_NORMAL_RANGES)
        for vitalKind, normalRange in (normalRanges or {}).items():
            if normalRange.low > normalRange.high:
                raise SubjectValidationError(
                    f"Invalid normal range for {vitalKind.value}: "
                    f"{normalRange.low} > {normalRange.high}",
                    details={'subjectId': subjectId}
                )
            self.normalRanges[vitalKind] = normalRange

        self.lock = threading.Lock()
        self._historyCapacity = historyCapacity
        self._windows: Dict[VitalKind, ReadingWindow] = {}

        self._latestRisk: Dict[VitalKind, RiskLevel] = {}

    # ================================================================================
    # History
    # ================================================================================

    @property
    def historyCapacity(self) -> int:
        return self._historyCapacity

    def addReading(self, reading: Reading) -> Optional[Reading]:
        """
        Append a reading to the window for its vital.

        Args:
            reading: Reading for this subject

        Returns:
            Evicted reading if the window overflowed, None otherwise
        """
        window = self._windows.get(reading.vitalKind)
        if window is None:
            window = ReadingWindow(self._historyCapacity)
            self._windows[reading.vitalKind] = window
        return window.append(reading)

    def getHistory(self, vitalKind: VitalKind) -> List[Reading]:
        """Get the full window for a vital, oldest first."""
        window = self._windows.get(vitalKind)
        return list(window) if window else []

    def getRecentReadings(self, vitalKind: VitalKind, count: int = 10) -> List[Reading]:
        """
        Get the most recent readings for a vital.

        Args:
            vitalKind: Vital sign
            count: Maximum number of readings

        Returns:
            Up to ``count`` readings, oldest first (empty if no history)
        """
        window = self._windows.get(vitalKind)
        return window.recent(count) if window else []

    def historyLength(self, vitalKind: VitalKind) -> int:
        window = self._windows.get(vitalKind)
        return len(window) if window else 0

    # ================================================================================
    # Risk Tracking
    # ================================================================================

    def setLatestRisk(self, vitalKind: VitalKind, riskLevel: RiskLevel) -> None:
        self._latestRisk[vitalKind] = riskLevel

    def getLatestRisk(self, vitalKind: VitalKind) -> Optional[RiskLevel]:
        return self._latestRisk.get(vitalKind)

    @property
    def currentRisk(self) -> Optional[RiskLevel]:
        """Most urgent latest classification across vitals (None if no readings)."""
        if not self._latestRisk:
            return None
        return min(self._latestRisk.values())

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        risk = self.currentRisk
        return {
            'subjectId': self.subjectId,
            'name': self.name,
            'age': self.age,
            'currentRisk': risk.name if risk is not None else None,
            'readings': {
                vitalKind.value: len(window)
                for vitalKind, window in self._windows.items()
            },
        }
