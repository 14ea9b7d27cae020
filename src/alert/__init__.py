################################################################################
# File Name: __init__.py
# Purpose/Description: Alert subpackage for priority queueing and dispatch
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial subpackage creation (US-001)
# 2026-01-22    | Ralph Agent  | Added all exports (US-011)
# 2026-10-13    | M. Cornelison | Priority queue, dispatcher and SLA exports
# ================================================================================
################################################################################
"""
Alert Subpackage.

This subpackage contains alert scheduling components:
- Alert data model and lifecycle
- Priority-ordered alert queue
- Dispatch with response-time and SLA tracking

Usage:
    from alert import AlertQueue, AlertDispatcher

    queue = AlertQueue()
    queue.push(alert)

    dispatcher = AlertDispatcher()
    records = dispatcher.dispatchAll(queue)
"""

from .dispatcher import AlertDispatcher, calculateResponseMs, checkSlaCompliance
from .exceptions import AlertConfigurationError, AlertError, AlertStateError
from .helpers import (
    createAlertQueueFromConfig,
    createDispatcherFromConfig,
    getAlertConfig,
    getDefaultAlertConfig,
    getSlaDeadlines,
    validateAlertConfig,
)
from .queue import AlertQueue
from .types import (
    DEFAULT_QUEUE_WARN_SIZE,
    RESPONSE_ACTIONS,
    SLA_DEADLINES_MS,
    Alert,
    AlertState,
    AlertStats,
    DispatchRecord,
    QueueEntry,
)

__all__ = [
    # Types - enums
    'AlertState',
    # Types - dataclasses
    'Alert',
    'QueueEntry',
    'DispatchRecord',
    'AlertStats',
    # Types - constants
    'SLA_DEADLINES_MS',
    'RESPONSE_ACTIONS',
    'DEFAULT_QUEUE_WARN_SIZE',
    # Exceptions
    'AlertError',
    'AlertConfigurationError',
    'AlertStateError',
    # Queue and dispatch
    'AlertQueue',
    'AlertDispatcher',
    'calculateResponseMs',
    'checkSlaCompliance',
    # Helper functions
    'createAlertQueueFromConfig',
    'createDispatcherFromConfig',
    'getAlertConfig',
    'getDefaultAlertConfig',
    'getSlaDeadlines',
    'validateAlertConfig',
]
