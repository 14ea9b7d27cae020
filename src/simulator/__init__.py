################################################################################
# File Name: __init__.py
# Purpose/Description: Simulator subpackage for devices and the monitoring console
# Author: Michael Cornelison
# Creation Date: 2026-10-14
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-14    | M. Cornelison | Initial subpackage creation
# ================================================================================
################################################################################
"""
Simulator Subpackage.

This subpackage contains the simulation surface around the orchestrator:
- MonitoringDevice: seeded random reading source per subject and vital
- MonitorCli: line-based interactive console

Usage:
    from simulator import MonitorCli, createDevicesForSubject
"""

from .device import (
    BASE_VALUES,
    DEFAULT_DEVICE_VITALS,
    DEFAULT_SPIKE_PROBABILITY,
    MonitoringDevice,
    createDevicesForSubject,
)
from .monitor_cli import (
    CliState,
    CommandResult,
    CommandType,
    MonitorCli,
    formatDispatchRecord,
)

__all__ = [
    # Devices
    'MonitoringDevice',
    'createDevicesForSubject',
    'BASE_VALUES',
    'DEFAULT_DEVICE_VITALS',
    'DEFAULT_SPIKE_PROBABILITY',
    # Console
    'MonitorCli',
    'CliState',
    'CommandType',
    'CommandResult',
    'formatDispatchRecord',
]
