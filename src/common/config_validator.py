################################################################################
# File Name: config_validator.py
# Purpose/Description: Configuration validation with required fields and defaults
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | Monitoring defaults; zero and false count as
#               |              | present for required keys
# ================================================================================
################################################################################

"""
Configuration validation module.

Provides validation of configuration files with:
- Required field checking
- Default value application
- Nested configuration support (dot notation)
- Clear error messages for missing fields

Section-specific checks (SLA table, analysis parameters, subjects) live in
alert.helpers and scheduler.helpers; typed range checks live in
common.settings.

Usage:
    from common.config_validator import ConfigValidator

    validator = ConfigValidator()
    config = validator.validate(rawConfig)
"""

from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, missingFields: Optional[List[str]] = None):
        super().__init__(message)
        self.missingFields = missingFields or []


REQUIRED_KEYS: List[str] = [
    'application.name',
]

DEFAULTS: Dict[str, Any] = {
    'application.name': 'VitalWatch',
    'application.version': '1.0.0',
    'logging.level': 'INFO',
    'logging.file': None,
    'logging.maskPII': True,
    'monitoring.cycles': 5,
    'monitoring.historyCapacity': 100,
    'monitoring.filterWindow': 10,
    'analysis.trend.windowSize': 5,
    'analysis.trend.deltaThreshold': 2.0,
    'analysis.falseAlarm.minReadings': 5,
    'analysis.falseAlarm.criticalZThreshold': 2.5,
    'analysis.falseAlarm.zThreshold': 1.5,
    'alerts.queueWarnSize': 1000,
    'alerts.slaDeadlinesMs.CRITICAL': 2000,
    'alerts.slaDeadlinesMs.HIGH': 30000,
    'alerts.slaDeadlinesMs.MEDIUM': 300000,
    'alerts.slaDeadlinesMs.LOW': 3600000,
    'simulator.seed': None,
    'simulator.spikeProbability': 0.1,
    'simulator.vitals': ['HEART_RATE', 'BLOOD_PRESSURE', 'OXYGEN_SATURATION', 'TEMPERATURE'],
    'subjects': [],
}


class ConfigValidator:
    """
    Validates configuration dictionaries.

    Attributes:
        requiredKeys: List of required configuration keys (dot notation)
        defaults: Dictionary of default values for optional fields
    """

    def __init__(
        self,
        requiredKeys: Optional[List[str]] = None,
        defaults: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the validator.

        Args:
            requiredKeys: List of required keys in dot notation (e.g., 'monitoring.cycles')
            defaults: Dictionary of default values in dot notation
        """
        self.requiredKeys = REQUIRED_KEYS if requiredKeys is None else requiredKeys
        self.defaults = DEFAULTS if defaults is None else defaults

    def validate(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and enhance configuration.

        Args:
            config: Raw configuration dictionary

        Returns:
            Validated configuration with defaults applied

        Raises:
            ConfigValidationError: If required fields are missing
        """
        missingFields = self._validateRequired(config)
        if missingFields:
            fieldList = ', '.join(missingFields)
            raise ConfigValidationError(
                f"Missing required configuration fields: {fieldList}",
                missingFields=missingFields
            )

        config = self._applyDefaults(config)

        logger.info("Configuration validated successfully")
        return config

    def _validateRequired(self, config: Dict[str, Any]) -> List[str]:
        """
        Check for required configuration fields.

        Empty strings count as missing; 0 and False are present.
        """
        missingFields = []

        for key in self.requiredKeys:
            value = self._getNestedValue(config, key)
            if value is None or value == '':
                missingFields.append(key)

        return missingFields

    def _applyDefaults(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for key, defaultValue in self.defaults.items():
            if self._getNestedValue(config, key) is None and defaultValue is not None:
                if isinstance(defaultValue, list):
                    defaultValue = list(defaultValue)
                self._setNestedValue(config, key, defaultValue)
                logger.debug(f"Applied default for {key}: {defaultValue}")

        return config

    def _getNestedValue(self, config: Dict[str, Any], key: str) -> Any:
        """
        Get a value from nested dictionary using dot notation.

        Args:
            config: Configuration dictionary
            key: Dot-notation key (e.g., 'analysis.trend.windowSize')

        Returns:
            Value if found, None otherwise
        """
        value = config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value

    def _setNestedValue(self, config: Dict[str, Any], key: str, value: Any) -> None:
        keys = key.split('.')
        current = config

        for k in keys[:-1]:
            if k not in current or not isinstance(current[k], dict):
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def validateField(
        self,
        config: Dict[str, Any],
        key: str,
        expectedType: type,
        allowNone: bool = False
    ) -> bool:
        """
        Validate a specific field's type.

        Args:
            config: Configuration dictionary
            key: Dot-notation key to validate
            expectedType: Expected Python type
            allowNone: Whether None is acceptable

        Returns:
            True if valid, False otherwise
        """
        value = self._getNestedValue(config, key)

        if value is None:
            return allowNone

        return isinstance(value, expectedType)


def validateConfig(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convenience function to validate configuration.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If validation fails
    """
    validator = ConfigValidator()
    return validator.validate(config)
