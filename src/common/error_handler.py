################################################################################
# File Name: error_handler.py
# Purpose/Description: Centralized error handling with classification
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | Dropped retry/auth categories; classify
#               |              | subpackage errors; collector per cycle
# ================================================================================
################################################################################

"""
Error handling module.

Provides centralized error handling with:
- Custom exception classes by error type
- Error classification (config, data, system)
- Structured error reporting
- Error collection across a batch of readings

Error policy:
- CONFIGURATION: fail fast at startup
- DATA: log and skip the offending reading or entry
- SYSTEM: log with traceback

Usage:
    from common.error_handler import ErrorCollector, handleError

    collector = ErrorCollector()
    for reading in readings:
        try:
            orchestrator.processReading(reading)
        except Exception as e:
            collector.add(e, subjectId=reading.subjectId)
    collector.report()
"""

import logging
import traceback
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Categories of errors for classification."""
    CONFIGURATION = 'config'      # Config errors, fail fast
    DATA = 'data'                 # Data validation, log and skip
    SYSTEM = 'system'             # Unexpected errors


# Subpackage exceptions do not derive from BaseError; classify them by name
NAMED_ERROR_CATEGORIES: dict[str, ErrorCategory] = {
    'ConfigValidationError': ErrorCategory.CONFIGURATION,
    'AlertConfigurationError': ErrorCategory.CONFIGURATION,
    'ValidationError': ErrorCategory.CONFIGURATION,
    'SubjectValidationError': ErrorCategory.DATA,
    'ClassificationError': ErrorCategory.DATA,
    'InsufficientDataError': ErrorCategory.DATA,
    'DuplicateSubjectError': ErrorCategory.DATA,
    'UnknownSubjectError': ErrorCategory.DATA,
}


# ================================================================================
# Custom Exception Classes
# ================================================================================

class BaseError(Exception):
    """Base exception for all custom errors."""

    category: ErrorCategory = ErrorCategory.SYSTEM

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def toDict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            'type': self.__class__.__name__,
            'category': self.category.value,
            'message': self.message,
            'details': self.details
        }


class ConfigurationError(BaseError):
    """Configuration validation failure."""
    category = ErrorCategory.CONFIGURATION


class DataError(BaseError):
    """Data validation or processing error."""
    category = ErrorCategory.DATA


# ================================================================================
# Error Classification
# ================================================================================

def classifyError(error: Exception) -> ErrorCategory:
    """
    Classify an error into a category.

    Args:
        error: Exception to classify

    Returns:
        ErrorCategory for the error
    """
    if isinstance(error, BaseError):
        return error.category

    for cls in type(error).__mro__:
        if cls.__name__ in NAMED_ERROR_CATEGORIES:
            return NAMED_ERROR_CATEGORIES[cls.__name__]

    if isinstance(error, (ValueError, TypeError, KeyError)):
        return ErrorCategory.DATA

    errorMessage = str(error).lower()
    if any(term in errorMessage for term in ['config', 'missing', 'required']):
        return ErrorCategory.CONFIGURATION

    return ErrorCategory.SYSTEM


# ================================================================================
# Error Handling
# ================================================================================

def handleError(
    error: Exception,
    context: dict[str, Any] | None = None,
    reraise: bool = True
) -> dict[str, Any]:
    """
    Handle an error with logging and classification.

    Args:
        error: Exception that occurred
        context: Additional context information
        reraise: Whether to re-raise the exception

    Returns:
        Error details dictionary

    Raises:
        The original exception if reraise is True
    """
    category = classifyError(error)
    context = context or {}

    errorDetails = {
        'type': type(error).__name__,
        'category': category.value,
        'message': str(error),
        'context': context,
        'traceback': traceback.format_exc()
    }

    if category == ErrorCategory.CONFIGURATION:
        logger.error(f"Configuration error: {error}")
    elif category == ErrorCategory.DATA:
        logger.warning(f"Data error: {error}")
    else:
        logger.error(f"Error: {error}", exc_info=True)

    if reraise:
        raise error

    return errorDetails


def formatError(error: Exception) -> str:
    """
    Format an error for display/logging.

    Args:
        error: Exception to format

    Returns:
        Formatted error string
    """
    category = classifyError(error)

    message = getattr(error, 'message', None)
    details = getattr(error, 'details', None)
    if isinstance(message, str):
        detailText = f" | details={details}" if details else ""
        return f"[{category.value.upper()}] {message}{detailText}"

    return f"[{category.value.upper()}] {type(error).__name__}: {error}"


class ErrorCollector:
    """
    Collects errors during batch processing.

    The orchestrator keeps one collector so a failing reading never stops
    a cycle; the errors are reported afterwards.

    Example:
        collector = ErrorCollector()
        for reading in readings:
            try:
                process(reading)
            except Exception as e:
                collector.add(e, subjectId=reading.subjectId)

        if collector.hasErrors():
            collector.report()
    """

    def __init__(self):
        self.errors: list[dict[str, Any]] = []

    def add(self, error: Exception, **context: Any) -> None:
        """Add an error to the collection."""
        self.errors.append({
            'error': error,
            'category': classifyError(error).value,
            'message': str(error),
            'context': context
        })

    def hasErrors(self) -> bool:
        return len(self.errors) > 0

    def count(self) -> int:
        return len(self.errors)

    def countByCategory(self) -> dict[str, int]:
        """Get number of collected errors per category."""
        counts: dict[str, int] = {}
        for err in self.errors:
            counts[err['category']] = counts.get(err['category'], 0) + 1
        return counts

    def report(self) -> None:
        """Log all collected errors."""
        if not self.errors:
            return

        logger.error(f"Collected {len(self.errors)} errors:")
        for i, err in enumerate(self.errors, 1):
            contextText = ' '.join(f'{k}={v}' for k, v in err['context'].items())
            logger.error(f"  {i}. [{err['category']}] {err['message']} {contextText}".rstrip())

    def clear(self) -> None:
        self.errors.clear()
