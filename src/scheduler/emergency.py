################################################################################
# File Name: emergency.py
# Purpose/Description: Emergency scenarios injected as single readings
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
Emergency scenarios.

Each scenario maps to one out-of-range reading that is pushed through the
normal ingestion path:

- cardiac-arrest       -> heart rate 200
- respiratory-failure  -> oxygen saturation 75
- hypertensive-crisis  -> blood pressure 220
- hypothermia          -> temperature 32
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from vitals.types import Reading, VitalKind


class EmergencyKind(Enum):
    """Emergency scenarios that can be injected."""

    CARDIAC_ARREST = "cardiac-arrest"
    RESPIRATORY_FAILURE = "respiratory-failure"
    HYPERTENSIVE_CRISIS = "hypertensive-crisis"
    HYPOTHERMIA = "hypothermia"


EMERGENCY_READINGS: Dict[EmergencyKind, Tuple[VitalKind, float]] = {
    EmergencyKind.CARDIAC_ARREST: (VitalKind.HEART_RATE, 200.0),
    EmergencyKind.RESPIRATORY_FAILURE: (VitalKind.OXYGEN_SATURATION, 75.0),
    EmergencyKind.HYPERTENSIVE_CRISIS: (VitalKind.BLOOD_PRESSURE, 220.0),
    EmergencyKind.HYPOTHERMIA: (VitalKind.TEMPERATURE, 32.0),
}

# Menu shortcuts used by the interactive console
EMERGENCY_SHORTCUTS: Dict[str, EmergencyKind] = {
    '1': EmergencyKind.CARDIAC_ARREST,
    '2': EmergencyKind.RESPIRATORY_FAILURE,
    '3': EmergencyKind.HYPERTENSIVE_CRISIS,
    '4': EmergencyKind.HYPOTHERMIA,
}


def parseEmergencyKind(text: str) -> EmergencyKind:
    """
    Parse an emergency from a menu shortcut, value or enum name.

    Args:
        text: '1', 'cardiac-arrest', 'CARDIAC_ARREST', ...

    Returns:
        Matching EmergencyKind

    Raises:
        ValueError: If the text names no emergency
    """
    normalized = text.strip()
    if normalized in EMERGENCY_SHORTCUTS:
        return EMERGENCY_SHORTCUTS[normalized]
    if normalized.upper().replace('-', '_') in EmergencyKind.__members__:
        return EmergencyKind[normalized.upper().replace('-', '_')]
    return EmergencyKind(normalized.lower())


def createEmergencyReading(
    emergencyKind: EmergencyKind,
    subjectId: int,
    timestamp: Optional[datetime] = None
) -> Reading:
    """
    Build the reading for an emergency scenario.

    Args:
        emergencyKind: Scenario to simulate
        subjectId: Subject affected
        timestamp: Reading time (now when omitted)

    Returns:
        Reading carrying the scenario's vital and value
    """
    vitalKind, value = EMERGENCY_READINGS[emergencyKind]
    return Reading(
        subjectId=subjectId,
        vitalKind=vitalKind,
        value=value,
        timestamp=timestamp or datetime.now(),
    )
