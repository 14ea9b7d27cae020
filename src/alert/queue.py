################################################################################
# File Name: queue.py
# Purpose/Description: Priority-ordered alert queue
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | Insertion sequence as third ordering key
# 2026-10-19    | M. Cornelison | totalPushed read under the queue lock
# ================================================================================
################################################################################
"""
Priority-ordered alert queue.

Alerts pop in this order:
1. Risk level ascending (CRITICAL first)
2. Creation time ascending (earlier first)
3. Insertion order (first pushed first)

The queue is unbounded. A warning is logged when it grows past
``warnSize`` so sustained overload is visible; nothing is shed.

All operations hold one lock, so pushes from several threads and a
concurrent drain are linearizable.

Usage:
    queue = AlertQueue()
    queue.push(alert)
    for alert in queue.drainAll():
        dispatcher.dispatch(alert)
"""

import heapq
import itertools
import logging
import threading
from typing import List, Optional

from .types import DEFAULT_QUEUE_WARN_SIZE, Alert, QueueEntry

logger = logging.getLogger(__name__)


class AlertQueue:
    """
    Heap-backed alert queue.

    Example:
        queue = AlertQueue()
        queue.push(criticalAlert)
        queue.push(highAlert)
        queue.popHighest()  # criticalAlert
    """

    def __init__(self, warnSize: int = DEFAULT_QUEUE_WARN_SIZE):
        """
        Initialize the queue.

        Args:
            warnSize: Size above which each push logs a warning
        """
        self._heap: List[QueueEntry] = []
        self._sequence = itertools.count()
        self._warnSize = warnSize
        self._totalPushed = 0
        self._lock = threading.Lock()

    def push(self, alert: Alert) -> None:
        """
        Add an alert.

        Args:
            alert: Alert to enqueue
        """
        with self._lock:
            entry = QueueEntry.forAlert(alert, next(self._sequence))
            heapq.heappush(self._heap, entry)
            self._totalPushed += 1
            size = len(self._heap)

        if size > self._warnSize:
            logger.warning(
                f"Alert queue backlog: {size} pending (warn size {self._warnSize})"
            )

    def popHighest(self) -> Optional[Alert]:
        """
        Remove and return the most urgent alert.

        Returns:
            The alert, or None if the queue is empty
        """
        with self._lock:
            if not self._heap:
                return None
            return heapq.heappop(self._heap).alert

    def peek(self) -> Optional[Alert]:
        """Return the most urgent alert without removing it."""
        with self._lock:
            return self._heap[0].alert if self._heap else None

    def drainAll(self) -> List[Alert]:
        """
        Remove every pending alert.

        Returns:
            Alerts in dispatch order (empty list if nothing pending)
        """
        with self._lock:
            drained = []
            while self._heap:
                drained.append(heapq.heappop(self._heap).alert)
            return drained

    def hasPending(self) -> bool:
        with self._lock:
            return bool(self._heap)

    def size(self) -> int:
        with self._lock:
            return len(self._heap)

    @property
    def totalPushed(self) -> int:
        with self._lock:
            return self._totalPushed

    def __len__(self) -> int:
        return self.size()
