################################################################################
# File Name: device.py
# Purpose/Description: Simulated bedside monitoring devices
# Author: Michael Cornelison
# Creation Date: 2026-10-14
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-14    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Simulated monitoring devices.

Provides:
- MonitoringDevice: one device per subject and vital sign
- createDevicesForSubject: the standard device set for a subject

Each reading is the vital's base value plus uniform noise in steps of 0.1
between -1.0 and +1.0. With probability 0.1 a spike between -30 and +30 is
added on top, which exercises the classifier and the false-alarm filter.

Usage:
    import random
    from simulator.device import createDevicesForSubject

    rng = random.Random(42)
    for device in createDevicesForSubject(subjectId=1, rng=rng):
        orchestrator.attachSource(device)
"""

import logging
import random
from collections.abc import Callable
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from scheduler.sources import ReadingSource
from vitals.types import Reading, VitalKind

logger = logging.getLogger(__name__)


# ================================================================================
# Constants
# ================================================================================

BASE_VALUES: Dict[VitalKind, float] = {
    VitalKind.HEART_RATE: 75.0,
    VitalKind.BLOOD_PRESSURE: 120.0,
    VitalKind.OXYGEN_SATURATION: 98.0,
    VitalKind.TEMPERATURE: 36.8,
    VitalKind.RESPIRATORY_RATE: 16.0,
}

# Respiratory rate is not monitored by the standard device set
DEFAULT_DEVICE_VITALS: List[VitalKind] = [
    VitalKind.HEART_RATE,
    VitalKind.BLOOD_PRESSURE,
    VitalKind.OXYGEN_SATURATION,
    VitalKind.TEMPERATURE,
]

NOISE_STEPS = 10  # +/- steps of NOISE_STEP_SIZE
NOISE_STEP_SIZE = 0.1
DEFAULT_SPIKE_PROBABILITY = 0.1
DEFAULT_SPIKE_MAGNITUDE = 30


# ================================================================================
# MonitoringDevice Class
# ================================================================================

class MonitoringDevice(ReadingSource):
    """
    Simulated device producing one vital sign for one subject.

    Attributes:
        deviceId: Device identifier
        vitalKind: Vital sign measured
        subjectId: Subject the device is attached to
    """

    def __init__(
        self,
        deviceId: int,
        vitalKind: VitalKind,
        subjectId: int,
        rng: Optional[random.Random] = None,
        spikeProbability: float = DEFAULT_SPIKE_PROBABILITY,
        spikeMagnitude: int = DEFAULT_SPIKE_MAGNITUDE,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize the device.

        Args:
            deviceId: Device identifier
            vitalKind: Vital sign measured
            subjectId: Subject the device is attached to
            rng: Random generator (seed it for reproducible runs)
            spikeProbability: Chance of a spike per reading (0-1)
            spikeMagnitude: Largest absolute spike
            clock: Source of reading timestamps
        """
        if not 0.0 <= spikeProbability <= 1.0:
            raise ValueError(f"spikeProbability must be within 0..1, got {spikeProbability}")

        self.deviceId = deviceId
        self.vitalKind = vitalKind
        self.subjectId = subjectId
        self._rng = rng or random.Random()
        self._spikeProbability = spikeProbability
        self._spikeMagnitude = spikeMagnitude
        self._clock = clock
        self._active = True
        self._readingCount = 0

    @property
    def baseValue(self) -> float:
        return BASE_VALUES[self.vitalKind]

    @property
    def readingCount(self) -> int:
        return self._readingCount

    def isActive(self) -> bool:
        return self._active

    def startMonitoring(self) -> None:
        self._active = True

    def stopMonitoring(self) -> None:
        """Stop producing readings; the orchestrator skips inactive sources."""
        self._active = False
        logger.debug(f"Device {self.deviceId} stopped | subject={self.subjectId}")

    def generateValue(self) -> float:
        """
        Generate the next simulated value.

        Returns:
            Base value plus noise, plus an occasional spike
        """
        value = self.baseValue
        value += self._rng.randint(-NOISE_STEPS, NOISE_STEPS) * NOISE_STEP_SIZE
        if self._rng.random() < self._spikeProbability:
            value += self._rng.randint(-self._spikeMagnitude, self._spikeMagnitude)
        return value

    def readReading(self) -> Optional[Reading]:
        """
        Produce a reading, or None when the device is stopped.
        """
        if not self._active:
            return None
        self._readingCount += 1
        return Reading(
            subjectId=self.subjectId,
            vitalKind=self.vitalKind,
            value=self.generateValue(),
            timestamp=self._clock(),
        )

    def __repr__(self) -> str:
        return (
            f"MonitoringDevice(deviceId={self.deviceId}, "
            f"vital={self.vitalKind.value}, subject={self.subjectId})"
        )


# ================================================================================
# Factory Functions
# ================================================================================

def createDevicesForSubject(
    subjectId: int,
    rng: Optional[random.Random] = None,
    vitals: Optional[Iterable[VitalKind]] = None,
    firstDeviceId: int = 1,
    spikeProbability: float = DEFAULT_SPIKE_PROBABILITY,
    clock: Callable[[], datetime] = datetime.now
) -> List[MonitoringDevice]:
    """
    Create the device set for a subject.

    Args:
        subjectId: Subject the devices are attached to
        rng: Shared random generator
        vitals: Vitals to monitor (heart rate, blood pressure, oxygen
            saturation and temperature when omitted)
        firstDeviceId: Id of the first device; the rest are consecutive
        spikeProbability: Chance of a spike per reading
        clock: Source of reading timestamps

    Returns:
        One MonitoringDevice per vital
    """
    rng = rng or random.Random()
    vitalKinds = list(vitals) if vitals is not None else list(DEFAULT_DEVICE_VITALS)
    return [
        MonitoringDevice(
            deviceId=firstDeviceId + offset,
            vitalKind=vitalKind,
            subjectId=subjectId,
            rng=rng,
            spikeProbability=spikeProbability,
            clock=clock,
        )
        for offset, vitalKind in enumerate(vitalKinds)
    ]
