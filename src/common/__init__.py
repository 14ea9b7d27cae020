################################################################################
# File Name: __init__.py
# Purpose/Description: Common utilities package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | Config loader and typed settings
# ================================================================================
################################################################################

"""
Common utilities package.

This package provides shared functionality used across the application:
- Configuration loading (.env + placeholders), validation and typed settings
- Logging configuration with PII masking
- Error handling

Usage:
    from common.config_loader import loadConfigWithEnv
    from common.config_validator import ConfigValidator
    from common.settings import loadSettings
    from common.logging_config import getLogger
    from common.error_handler import ConfigurationError
"""

from .config_loader import loadConfigWithEnv
from .config_validator import ConfigValidationError, ConfigValidator
from .error_handler import (
    BaseError,
    ConfigurationError,
    DataError,
    ErrorCategory,
    ErrorCollector,
    classifyError,
    handleError,
)
from .logging_config import LogContext, getLogger, setupLogging
from .settings import MonitorSettings, loadSettings

__all__ = [
    'ConfigValidator',
    'ConfigValidationError',
    'loadConfigWithEnv',
    'MonitorSettings',
    'loadSettings',
    'getLogger',
    'setupLogging',
    'LogContext',
    'BaseError',
    'ConfigurationError',
    'DataError',
    'ErrorCategory',
    'ErrorCollector',
    'classifyError',
    'handleError',
]
