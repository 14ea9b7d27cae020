################################################################################
# File Name: helpers.py
# Purpose/Description: Helper functions for alert scheduling
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial implementation for US-011
# 2026-10-13    | M. Cornelison | Queue/dispatcher factories and SLA config
# ================================================================================
################################################################################
"""
Helper functions for alert scheduling.

Provides factory functions and configuration helpers for the AlertQueue and
AlertDispatcher.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from vitals.types import RiskLevel

from .dispatcher import AlertDispatcher
from .queue import AlertQueue
from .types import DEFAULT_QUEUE_WARN_SIZE, SLA_DEADLINES_MS

logger = logging.getLogger(__name__)


def getAlertConfig(config: dict[str, Any]) -> dict[str, Any]:
    """
    Get alert configuration section.

    Args:
        config: Full configuration dictionary

    Returns:
        Alert configuration section
    """
    return config.get('alerts', {})


def getDefaultAlertConfig() -> dict[str, Any]:
    """
    Get default alert configuration.

    Returns:
        Default alert config dictionary
    """
    return {
        'queueWarnSize': DEFAULT_QUEUE_WARN_SIZE,
        'slaDeadlinesMs': {
            level.name: deadline for level, deadline in SLA_DEADLINES_MS.items()
        },
    }


def getSlaDeadlines(config: dict[str, Any]) -> dict[RiskLevel, int]:
    """
    Read the SLA deadline table from config.

    Levels not present in config keep their default deadline.

    Args:
        config: Full configuration dictionary

    Returns:
        Deadline in milliseconds per RiskLevel
    """
    deadlines = dict(SLA_DEADLINES_MS)
    configured = getAlertConfig(config).get('slaDeadlinesMs', {})
    for levelName, deadline in configured.items():
        if levelName in RiskLevel.__members__:
            deadlines[RiskLevel[levelName]] = int(deadline)
        else:
            logger.warning(f"Unknown risk level in slaDeadlinesMs: {levelName}")
    return deadlines


def validateAlertConfig(config: dict[str, Any]) -> list[str]:
    """
    Validate alert configuration.

    Args:
        config: Full configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    alertsConfig = getAlertConfig(config)

    if 'queueWarnSize' in alertsConfig:
        warnSize = alertsConfig['queueWarnSize']
        if not isinstance(warnSize, int) or isinstance(warnSize, bool):
            errors.append("queueWarnSize must be an integer")
        elif warnSize < 1:
            errors.append("queueWarnSize must be at least 1")

    for levelName, deadline in alertsConfig.get('slaDeadlinesMs', {}).items():
        if levelName not in RiskLevel.__members__:
            errors.append(f"Unknown risk level in slaDeadlinesMs: {levelName}")
            continue
        if not isinstance(deadline, (int, float)) or isinstance(deadline, bool):
            errors.append(f"SLA deadline for {levelName} must be a number")
        elif deadline <= 0:
            errors.append(f"SLA deadline for {levelName} must be positive")

    return errors


def createAlertQueueFromConfig(config: dict[str, Any]) -> AlertQueue:
    """
    Create an AlertQueue from configuration.

    Args:
        config: Full configuration dictionary

    Returns:
        Configured AlertQueue
    """
    warnSize = getAlertConfig(config).get('queueWarnSize', DEFAULT_QUEUE_WARN_SIZE)
    return AlertQueue(warnSize=warnSize)


def createDispatcherFromConfig(
    config: dict[str, Any],
    clock: Callable[[], datetime] = datetime.now
) -> AlertDispatcher:
    """
    Create an AlertDispatcher from configuration.

    Args:
        config: Full configuration dictionary
        clock: Source of dispatch timestamps

    Returns:
        Configured AlertDispatcher
    """
    deadlines = getSlaDeadlines(config)
    dispatcher = AlertDispatcher(slaDeadlinesMs=deadlines, clock=clock)

    logger.info(
        "AlertDispatcher created from config: "
        + ", ".join(f"{level.name}={ms}ms" for level, ms in deadlines.items())
    )
    return dispatcher
