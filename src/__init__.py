################################################################################
# File Name: __init__.py
# Purpose/Description: Main application package initialization
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-16    | M. Cornelison | Listed monitoring packages
# ================================================================================
################################################################################

"""
Main application package.

This package contains the application source code organized as:
- common/: Shared utilities (config, settings, logging, errors)
- vitals/: Vital-sign types, subject history, risk classification
- analysis/: Statistics, trend detection, false-alarm filtering
- alert/: Alert model, priority queue, dispatch with SLA tracking
- scheduler/: Orchestrator, reading sources, emergencies
- simulator/: Simulated devices and the interactive console

Entry point: main.py
"""

__version__ = '1.0.0'
