################################################################################
# File Name: exceptions.py
# Purpose/Description: Exception classes for the scheduling orchestrator
# Author: Ralph Agent
# Creation Date: 2026-01-23
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-23    | Ralph Agent  | Initial implementation for US-OSC-001
# 2026-10-13    | M. Cornelison | Subject registry errors
# ================================================================================
################################################################################
"""
Exception classes for the scheduling orchestrator.

Provides:
- SchedulerError: Base exception for orchestrator errors
- DuplicateSubjectError: Subject id already registered
- UnknownSubjectError: Subject id not registered
"""

from typing import Any, Optional


class SchedulerError(Exception):
    """Base exception for orchestrator errors."""

    def __init__(
        self,
        message: str,
        subjectId: Optional[int] = None,
        details: Optional[dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.subjectId = subjectId
        self.details = details or {}


class DuplicateSubjectError(SchedulerError):
    """Subject id already registered."""
    pass


class UnknownSubjectError(SchedulerError):
    """Subject id not registered."""
    pass
