################################################################################
# File Name: __init__.py
# Purpose/Description: Test package initialization
# Author: [Author Name]
# Creation Date: 2026-01-21
# Copyright: (c) 2026 [Author Name]. All rights reserved.
################################################################################

"""
Test package for the application.

Run tests with:
    pytest tests/
    pytest tests/ --cov=src --cov-report=html
"""
