################################################################################
# File Name: sources.py
# Purpose/Description: Reading source interface consumed by the orchestrator
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
Reading source interface.

The orchestrator polls attached sources once per monitoring cycle. Any
object implementing ReadingSource can feed it: simulated devices, replayed
recordings, or a scripted sequence in tests.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from vitals.types import Reading


class ReadingSource(ABC):
    """
    Abstract pull-style source of readings.

    All sources must implement:
    - isActive(): Whether the source should be polled
    - readReading(): Produce the next reading
    """

    @abstractmethod
    def isActive(self) -> bool:
        """Check if the source should be polled this cycle."""
        pass

    @abstractmethod
    def readReading(self) -> Optional[Reading]:
        """
        Produce the next reading.

        Returns:
            Reading, or None if nothing is available this cycle
        """
        pass


class ScriptedReadingSource(ReadingSource):
    """
    Source that replays a fixed sequence, one reading per poll.

    Becomes inactive once the sequence is exhausted.
    """

    def __init__(self, readings: Iterable[Reading]):
        self._pending: List[Reading] = list(readings)

    def isActive(self) -> bool:
        return bool(self._pending)

    def readReading(self) -> Optional[Reading]:
        if not self._pending:
            return None
        return self._pending.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._pending)
