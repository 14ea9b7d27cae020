################################################################################
# File Name: exceptions.py
# Purpose/Description: Exception classes for the vitals subpackage
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
Exception classes for the vitals subpackage.

Provides a hierarchy of exception classes for vitals-related errors:
- VitalsError: Base exception for all vitals errors
- ClassificationError: Vital kind has no threshold table
- SubjectValidationError: Invalid subject registration data
"""

from typing import Any


class VitalsError(Exception):
    """Base exception for vitals-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ClassificationError(VitalsError):
    """Vital kind has no threshold table."""
    pass


class SubjectValidationError(VitalsError):
    """Invalid subject registration data."""
    pass
