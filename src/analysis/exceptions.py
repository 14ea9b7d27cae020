################################################################################
# File Name: exceptions.py
# Purpose/Description: Exception classes for the analysis subpackage
# Author: Ralph Agent
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | Ralph Agent  | Initial creation for US-010 refactoring
# 2026-10-12    | M. Cornelison | Reworked for reading-window statistics
# ================================================================================
################################################################################

"""
Exception definitions for the analysis subpackage.

Provides:
- AnalysisError: Base exception for window analysis errors
- InsufficientDataError: Not enough readings to calculate a statistic

These exceptions have minimal dependencies (only stdlib).
"""

from typing import Any

# ================================================================================
# Custom Exceptions
# ================================================================================

class AnalysisError(Exception):
    """Base exception for window analysis errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InsufficientDataError(AnalysisError):
    """Not enough readings to calculate a statistic."""
    pass
