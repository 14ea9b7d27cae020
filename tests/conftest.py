################################################################################
# File Name: conftest.py
# Purpose/Description: Pytest fixtures and configuration
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-16    | M. Cornelison | Monitoring config, fake clock, orchestrator
#               |              | and reading factories
# ================================================================================
################################################################################

"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(fakeClock, orchestrator):
        orchestrator.registerSubject(1, "Test Subject", 40)
        fakeClock.advance(ms=500)
"""

import json
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
srcPath = Path(__file__).parent.parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from scheduler.orchestrator import SchedulingOrchestrator
from vitals.types import Reading, VitalKind

CLOCK_START = datetime(2026, 10, 12, 8, 0, 0)


# ================================================================================
# Clock
# ================================================================================

class FakeClock:
    """Manually advanced clock; call it to read the current time."""

    def __init__(self, start: datetime = CLOCK_START):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, ms: int = 0, seconds: float = 0) -> datetime:
        self.now = self.now + timedelta(milliseconds=ms, seconds=seconds)
        return self.now


@pytest.fixture
def fakeClock() -> FakeClock:
    """
    Provide a clock frozen at CLOCK_START.

    Returns:
        FakeClock instance
    """
    return FakeClock()


# ================================================================================
# Domain Fixtures
# ================================================================================

@pytest.fixture
def orchestrator(fakeClock: FakeClock) -> SchedulingOrchestrator:
    """
    Provide an orchestrator with default components and the fake clock.

    Returns:
        SchedulingOrchestrator with no subjects registered
    """
    return SchedulingOrchestrator(clock=fakeClock)


@pytest.fixture
def makeReadings(fakeClock: FakeClock) -> Callable[..., List[Reading]]:
    """
    Provide a factory for reading sequences.

    Usage:
        readings = makeReadings(1, VitalKind.HEART_RATE, [75, 76, 74])
    """
    def factory(subjectId: int, vitalKind: VitalKind, values: List[float]) -> List[Reading]:
        return [
            Reading(subjectId=subjectId, vitalKind=vitalKind, value=value, timestamp=fakeClock())
            for value in values
        ]

    return factory


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture
def sampleConfig() -> Dict[str, Any]:
    """
    Provide sample configuration for tests.

    Returns:
        Dictionary with test configuration values
    """
    return {
        'application': {
            'name': 'TestApp',
            'version': '1.0.0',
            'environment': 'test'
        },
        'logging': {
            'level': 'DEBUG',
            'maskPII': True
        },
        'monitoring': {
            'cycles': 3,
            'historyCapacity': 50,
            'filterWindow': 10
        },
        'analysis': {
            'trend': {'windowSize': 5, 'deltaThreshold': 2.0},
            'falseAlarm': {'minReadings': 5, 'criticalZThreshold': 2.5, 'zThreshold': 1.5}
        },
        'alerts': {
            'queueWarnSize': 100,
            'slaDeadlinesMs': {
                'CRITICAL': 2000,
                'HIGH': 30000,
                'MEDIUM': 300000,
                'LOW': 3600000
            }
        },
        'simulator': {
            'seed': 42,
            'spikeProbability': 0.1,
            'vitals': ['HEART_RATE', 'BLOOD_PRESSURE', 'OXYGEN_SATURATION', 'TEMPERATURE']
        },
        'subjects': [
            {'id': 1, 'name': 'John Doe', 'age': 45},
            {'id': 2, 'name': 'Jane Smith', 'age': 67},
        ]
    }


@pytest.fixture
def minimalConfig() -> Dict[str, Any]:
    """
    Provide minimal configuration for testing defaults.

    Returns:
        Dictionary with minimal configuration
    """
    return {
        'application': {
            'name': 'MinimalApp'
        }
    }


@pytest.fixture
def invalidConfig() -> Dict[str, Any]:
    """
    Provide invalid configuration for error testing.

    Returns:
        Dictionary with invalid/missing configuration
    """
    return {
        'application': {
            # Missing required fields
        }
    }


# ================================================================================
# Environment Fixtures
# ================================================================================

ENV_VARS_UNDER_TEST = [
    'VITALWATCH_ENV', 'VITALWATCH_CYCLES', 'VITALWATCH_SEED',
    'LOG_LEVEL', 'LOG_FILE', 'TEST_VAR',
]


@pytest.fixture
def envVars() -> Generator[Dict[str, str], None, None]:
    """
    Set up test environment variables.

    Yields:
        Dictionary of environment variables that were set

    Automatically cleans up after test.
    """
    testVars = {
        'VITALWATCH_ENV': 'test',
        'VITALWATCH_CYCLES': '2',
        'VITALWATCH_SEED': '7',
    }

    originalVars = {}
    for key in testVars:
        originalVars[key] = os.environ.get(key)
        os.environ[key] = testVars[key]

    yield testVars

    for key, value in originalVars.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def cleanEnv() -> Generator[None, None, None]:
    """
    Ensure clean environment with no test variables.

    Removes the variables the configuration reads before the test and
    restores them after.
    """
    saved = {}
    for var in ENV_VARS_UNDER_TEST:
        saved[var] = os.environ.pop(var, None)

    yield

    for var in ENV_VARS_UNDER_TEST:
        os.environ.pop(var, None)
        if saved[var] is not None:
            os.environ[var] = saved[var]


# ================================================================================
# Mock Fixtures
# ================================================================================

@pytest.fixture
def mockLogger() -> MagicMock:
    """
    Provide mock logger for testing log calls.

    Returns:
        MagicMock logger instance
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger


# ================================================================================
# File System Fixtures
# ================================================================================

@pytest.fixture
def tempConfigFile(tmp_path: Path, sampleConfig: Dict[str, Any]) -> Path:
    """
    Create temporary config file for testing.

    Returns:
        Path to temporary config file
    """
    configFile = tmp_path / 'config.json'
    with open(configFile, 'w') as f:
        json.dump(sampleConfig, f)

    return configFile


@pytest.fixture
def tempEnvFile(tmp_path: Path) -> Path:
    """
    Create temporary .env file for testing.

    Returns:
        Path to temporary .env file
    """
    envFile = tmp_path / '.env'
    with open(envFile, 'w') as f:
        f.write('# test environment\n')
        f.write('VITALWATCH_CYCLES=4\n')
        f.write('TEST_VAR="quoted value"\n')

    return envFile


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def assertNoLogs(caplog: pytest.LogCaptureFixture) -> Generator[None, None, None]:
    """
    Assert that no error logs were emitted during test.

    Usage:
        def test_something(assertNoLogs):
            # Will fail if any ERROR logs are emitted
    """
    yield

    errors = [r for r in caplog.records if r.levelname == 'ERROR']
    assert len(errors) == 0, f"Unexpected error logs: {[r.message for r in errors]}"


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
