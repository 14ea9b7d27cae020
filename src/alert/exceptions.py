################################################################################
# File Name: exceptions.py
# Purpose/Description: Exception classes for alert scheduling
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial implementation for US-011
# 2026-10-12    | M. Cornelison | Alert state errors replace database errors
# ================================================================================
################################################################################
"""
Exception classes for alert scheduling.

Provides a hierarchy of exception classes for alert-related errors:
- AlertError: Base exception for all alert errors
- AlertConfigurationError: Errors in alert configuration
- AlertStateError: Invalid alert lifecycle transition
"""

from typing import Any


class AlertError(Exception):
    """Base exception for alert-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class AlertConfigurationError(AlertError):
    """Error in alert configuration."""
    pass


class AlertStateError(AlertError):
    """Invalid alert lifecycle transition."""
    pass
