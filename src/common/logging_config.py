################################################################################
# File Name: logging_config.py
# Purpose/Description: Structured logging configuration and utilities
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | Mask medical record numbers, per-logger levels,
#               |              | cycle context on records
# ================================================================================
################################################################################

"""
Logging configuration module.

Provides structured logging with:
- Configurable log levels, globally and per logger
- Console and file output
- PII masking (emails, phone numbers, SSNs, medical record numbers)
- Context fields appended to every record inside a LogContext

Subject names are never logged by the pipeline; subjects are referred to by
their integer id.

Usage:
    from common.logging_config import setupLogging, getLogger

    setupLogging(level='INFO', loggerLevels={'alert.dispatcher': 'WARNING'})
    logger = getLogger(__name__)

    with LogContext(cycle=3):
        logger.info("Cycle started")   # ... | cycle=3
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s | %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Order matters: SSN before phone so 123-45-6789 is not half-matched
PII_PATTERNS = {
    'mrn': re.compile(r'\bMRN[:#\s-]*\d{5,10}\b', re.IGNORECASE),
    'email': re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'),
    'ssn': re.compile(r'\b\d{3}-\d{2}-\d{4}\b'),
    'phone': re.compile(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b'),
}


def maskPII(message: str) -> str:
    """
    Replace PII in a message with [<KIND>_MASKED] markers.

    Args:
        message: Text to mask

    Returns:
        Masked text
    """
    for name, pattern in PII_PATTERNS.items():
        message = pattern.sub(f'[{name.upper()}_MASKED]', message)
    return message


class PIIMaskingFilter(logging.Filter):
    """
    Logging filter that masks PII in log messages.

    The message is rendered with its arguments before masking, so PII passed
    as a %-style argument is masked too.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask PII in a log record.

        Args:
            record: Log record to filter

        Returns:
            True (always allows record, but modifies it)
        """
        if isinstance(record.msg, str):
            record.msg = maskPII(record.getMessage())
            record.args = None
        return True


class StructuredFormatter(logging.Formatter):
    """
    Formatter that appends context fields as key=value pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        extra = getattr(record, 'extra', None)
        if extra and isinstance(extra, dict):
            message += ' | ' + ' '.join(f'{k}={v}' for k, v in extra.items())

        return message


def setupLogging(
    level: str = 'INFO',
    logFormat: str | None = None,
    logFile: str | None = None,
    enablePIIMasking: bool = True,
    loggerLevels: dict[str, str] | None = None
) -> logging.Logger:
    """
    Configure application logging.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR)
        logFormat: Custom format string
        logFile: Optional file path for log output
        enablePIIMasking: Whether to mask PII in logs
        loggerLevels: Level overrides per logger name

    Returns:
        Root logger instance
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(getattr(logging, level.upper(), logging.INFO))
    rootLogger.handlers.clear()

    formatter = StructuredFormatter(
        fmt=logFormat or DEFAULT_FORMAT,
        datefmt=DEFAULT_DATE_FORMAT
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if logFile:
        logPath = Path(logFile)
        logPath.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logFile, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        if enablePIIMasking:
            handler.addFilter(PIIMaskingFilter())
        rootLogger.addHandler(handler)

    for loggerName, loggerLevel in (loggerLevels or {}).items():
        logging.getLogger(loggerName).setLevel(
            getattr(logging, loggerLevel.upper(), logging.INFO)
        )

    rootLogger.info(f"Logging configured | level={level} | file={logFile or 'none'}")

    return rootLogger


def getLogger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def logWithContext(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with key=value context appended.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        **context: Additional context fields
    """
    logFunc = getattr(logger, level.lower(), logger.info)

    if context:
        logFunc(message + ' | ' + ' '.join(f'{k}={v}' for k, v in context.items()))
    else:
        logFunc(message)


class LogContext:
    """
    Context manager that attaches fields to every record created inside it.

    Usage:
        with LogContext(cycle=7):
            logger.info("Draining queue")  # Includes cycle=7
    """

    def __init__(self, **context: Any):
        self.context = context
        self._oldFactory = None

    def __enter__(self) -> 'LogContext':
        self._oldFactory = logging.getLogRecordFactory()

        oldFactory = self._oldFactory
        context = self.context

        def recordFactory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = oldFactory(*args, **kwargs)
            record.extra = context
            return record

        logging.setLogRecordFactory(recordFactory)
        return self

    def __exit__(self, *args: Any) -> None:
        if self._oldFactory:
            logging.setLogRecordFactory(self._oldFactory)
