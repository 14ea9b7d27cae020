################################################################################
# File Name: settings.py
# Purpose/Description: Typed, range-checked settings built on pydantic models
# Author: Michael Cornelison
# Creation Date: 2026-10-15
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-15    | M. Cornelison | Initial implementation
# ================================================================================
################################################################################

"""
Typed monitoring settings.

The JSON configuration is loaded and defaulted as a plain dictionary (see
config_loader and config_validator). loadSettings then parses it into
pydantic models so every value the application reads is typed and range
checked. Pydantic validation errors are converted to ConfigurationError.

Subject normal ranges are given as [low, high] per vital name:

    "subjects": [
        {"id": 1, "name": "John Doe", "age": 45,
         "normalRanges": {"HEART_RATE": [55, 95]}}
    ]

Usage:
    from common.settings import loadSettings

    settings = loadSettings(config)
    settings.monitoring.cycles
    settings.simulator.seed
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from vitals.types import RiskLevel, parseVitalKind

from .error_handler import ConfigurationError

logger = logging.getLogger(__name__)


class ApplicationSettings(BaseModel):
    name: str = 'VitalWatch'
    version: str = '1.0.0'
    environment: str = 'development'


class LoggingSettings(BaseModel):
    level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'
    file: Optional[str] = None
    maskPII: bool = True
    loggerLevels: Dict[str, str] = Field(default_factory=dict)

    @field_validator('level', mode='before')
    @classmethod
    def upperLevel(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator('file', mode='before')
    @classmethod
    def emptyFileIsNone(cls, value: Any) -> Any:
        return None if value == '' else value


class MonitoringSettings(BaseModel):
    cycles: int = Field(5, ge=0)
    historyCapacity: int = Field(100, ge=1, le=100000)
    filterWindow: int = Field(10, ge=1)

    @model_validator(mode='after')
    def windowFitsHistory(self) -> 'MonitoringSettings':
        if self.filterWindow > self.historyCapacity:
            raise ValueError('filterWindow cannot exceed historyCapacity')
        return self


class TrendSettings(BaseModel):
    windowSize: int = Field(5, ge=2)
    deltaThreshold: float = Field(2.0, gt=0)


class FalseAlarmSettings(BaseModel):
    minReadings: int = Field(5, ge=2)
    criticalZThreshold: float = Field(2.5, gt=0)
    zThreshold: float = Field(1.5, gt=0)


class AnalysisSettings(BaseModel):
    trend: TrendSettings = Field(default_factory=TrendSettings)
    falseAlarm: FalseAlarmSettings = Field(default_factory=FalseAlarmSettings)


class AlertSettings(BaseModel):
    queueWarnSize: int = Field(1000, ge=1)
    slaDeadlinesMs: Dict[str, int] = Field(default_factory=dict)

    @field_validator('slaDeadlinesMs')
    @classmethod
    def knownLevels(cls, value: Dict[str, int]) -> Dict[str, int]:
        for levelName, deadline in value.items():
            if levelName not in RiskLevel.__members__:
                raise ValueError(f'unknown risk level {levelName}')
            if deadline <= 0:
                raise ValueError(f'deadline for {levelName} must be positive')
        return value


class SimulatorSettings(BaseModel):
    seed: Optional[int] = None
    spikeProbability: float = Field(0.1, ge=0.0, le=1.0)
    vitals: List[str] = Field(
        default_factory=lambda: ['HEART_RATE', 'BLOOD_PRESSURE', 'OXYGEN_SATURATION', 'TEMPERATURE']
    )

    @field_validator('seed', mode='before')
    @classmethod
    def emptySeedIsNone(cls, value: Any) -> Any:
        return None if value == '' else value

    @field_validator('vitals')
    @classmethod
    def knownVitals(cls, value: List[str]) -> List[str]:
        for name in value:
            parseVitalKind(name)
        return value


class SubjectSettings(BaseModel):
    id: int = Field(ge=0)
    name: str = Field(min_length=1)
    age: int = Field(ge=0, le=130)
    normalRanges: Dict[str, Tuple[float, float]] = Field(default_factory=dict)

    @field_validator('normalRanges')
    @classmethod
    def orderedRanges(
        cls,
        value: Dict[str, Tuple[float, float]]
    ) -> Dict[str, Tuple[float, float]]:
        for name, (low, high) in value.items():
            parseVitalKind(name)
            if low > high:
                raise ValueError(f'normal range for {name} has low > high')
        return value


class MonitorSettings(BaseModel):
    """Root settings model."""

    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)
    subjects: List[SubjectSettings] = Field(default_factory=list)

    @model_validator(mode='after')
    def uniqueSubjectIds(self) -> 'MonitorSettings':
        ids = [subject.id for subject in self.subjects]
        if len(ids) != len(set(ids)):
            raise ValueError('subject ids must be unique')
        return self


def loadSettings(config: Dict[str, Any]) -> MonitorSettings:
    """
    Parse a configuration dictionary into typed settings.

    Args:
        config: Configuration dictionary (placeholders already resolved)

    Returns:
        MonitorSettings

    Raises:
        ConfigurationError: If any value has the wrong type or is out of range
    """
    try:
        settings = MonitorSettings.model_validate(config)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(
            f"Invalid settings: {'; '.join(problems)}",
            details={'errors': problems}
        ) from e

    logger.debug(
        f"Settings loaded | subjects={len(settings.subjects)} | "
        f"cycles={settings.monitoring.cycles}"
    )
    return settings
