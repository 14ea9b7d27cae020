################################################################################
# File Name: types.py
# Purpose/Description: Type definitions for vital-sign readings
# Author: Michael Cornelison
# Creation Date: 2026-10-12
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-12    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################
"""
Type definitions for vital-sign readings.

Contains enums, dataclasses, and constants used by the vitals subpackage.
This module has no dependencies on other project modules.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


# ================================================================================
# Enums
# ================================================================================

class VitalKind(Enum):
    """Vital signs a monitoring device can report."""

    HEART_RATE = "heart_rate"
    BLOOD_PRESSURE = "blood_pressure"          # systolic, mmHg
    OXYGEN_SATURATION = "oxygen_saturation"    # SpO2, percent
    TEMPERATURE = "temperature"                # Celsius
    RESPIRATORY_RATE = "respiratory_rate"      # breaths per minute


class RiskLevel(Enum):
    """
    Urgency of a reading or alert.

    Lower value is more urgent. Comparison follows urgency, so
    ``RiskLevel.CRITICAL < RiskLevel.LOW``.
    """

    CRITICAL = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4

    def __lt__(self, other: 'RiskLevel') -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: 'RiskLevel') -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: 'RiskLevel') -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: 'RiskLevel') -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.value >= other.value


# ================================================================================
# Constants
# ================================================================================

# Maximum readings kept per (subject, vital) window
DEFAULT_HISTORY_CAPACITY = 100

# Display names used in alert messages
VITAL_DISPLAY_NAMES: Dict[VitalKind, str] = {
    VitalKind.HEART_RATE: "Heart Rate",
    VitalKind.BLOOD_PRESSURE: "Blood Pressure",
    VitalKind.OXYGEN_SATURATION: "Oxygen Saturation",
    VitalKind.TEMPERATURE: "Temperature",
    VitalKind.RESPIRATORY_RATE: "Respiratory Rate",
}

# Units for log output
VITAL_UNITS: Dict[VitalKind, str] = {
    VitalKind.HEART_RATE: "bpm",
    VitalKind.BLOOD_PRESSURE: "mmHg",
    VitalKind.OXYGEN_SATURATION: "%",
    VitalKind.TEMPERATURE: "C",
    VitalKind.RESPIRATORY_RATE: "br/min",
}


# ================================================================================
# Data Classes
# ================================================================================

@dataclass(frozen=True)
class NormalRange:
    """
    Inclusive normal range for a vital sign.

    Attributes:
        low: Lowest value considered normal
        high: Highest value considered normal
    """

    low: float
    high: float

    def contains(self, value: float) -> bool:
        """Check if a value lies inside the range (bounds inclusive)."""
        return self.low <= value <= self.high

    def toDict(self) -> Dict[str, float]:
        """Convert to dictionary for logging/serialization."""
        return {'low': self.low, 'high': self.high}


# Adult resting normal ranges; subjects may override individual entries
DEFAULT_NORMAL_RANGES: Dict[VitalKind, NormalRange] = {
    VitalKind.HEART_RATE: NormalRange(60.0, 100.0),
    VitalKind.BLOOD_PRESSURE: NormalRange(90.0, 140.0),
    VitalKind.OXYGEN_SATURATION: NormalRange(95.0, 100.0),
    VitalKind.TEMPERATURE: NormalRange(36.1, 37.2),
    VitalKind.RESPIRATORY_RATE: NormalRange(12.0, 20.0),
}


@dataclass(frozen=True)
class Reading:
    """
    A single vital-sign measurement.

    Readings are immutable once created.

    Attributes:
        subjectId: Monitored subject the reading belongs to
        vitalKind: Which vital sign was measured
        value: Measured value in the vital's native unit
        timestamp: When the measurement was taken
    """

    subjectId: int
    vitalKind: VitalKind
    value: float
    timestamp: datetime = field(default_factory=datetime.now)

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'subjectId': self.subjectId,
            'vitalKind': self.vitalKind.value,
            'value': self.value,
            'timestamp': self.timestamp.isoformat(),
        }


def getVitalDisplayName(vitalKind: VitalKind) -> str:
    """
    Get the human readable name for a vital sign.

    Args:
        vitalKind: Vital sign

    Returns:
        Display name (e.g., 'Heart Rate')
    """
    return VITAL_DISPLAY_NAMES[vitalKind]


def parseVitalKind(name: str) -> VitalKind:
    """
    Parse a vital kind from its enum name or value.

    Args:
        name: 'HEART_RATE', 'heart_rate', etc.

    Returns:
        Matching VitalKind

    Raises:
        ValueError: If the name is not a known vital sign
    """
    normalized = name.strip()
    if normalized.upper() in VitalKind.__members__:
        return VitalKind[normalized.upper()]
    return VitalKind(normalized.lower())
