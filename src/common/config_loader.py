################################################################################
# File Name: config_loader.py
# Purpose/Description: Configuration loading with .env support and placeholders
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-15    | M. Cornelison | .env loading through python-dotenv; typed
#               |              | values for whole-string placeholders
# ================================================================================
################################################################################

"""
Configuration loading module.

Provides:
- Loading environment variables from a .env file (python-dotenv)
- Resolution of ${VAR_NAME} placeholders in configuration
- Default values: ${VAR_NAME:default}
- Typed values when a placeholder is the whole string:
  "${CYCLES:5}" becomes 5, "${MASK:true}" becomes True, "${SEED:}" stays ""

Values read from the environment are never logged.

Usage:
    from common.config_loader import loadConfigWithEnv

    config = loadConfigWithEnv('src/monitor_config.json', envPath='.env')
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Pattern to match ${VAR_NAME} or ${VAR_NAME:default}
PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')


def loadEnvFile(envPath: Optional[str] = None) -> bool:
    """
    Load environment variables from a .env file.

    Existing environment variables are not overridden.

    Args:
        envPath: Path to .env file. Defaults to .env in current directory.

    Returns:
        True if a file was found and loaded
    """
    envFile = Path(envPath or '.env')

    if not envFile.exists():
        logger.debug(f".env file not found at {envFile}")
        return False

    loaded = load_dotenv(dotenv_path=envFile, override=False)
    logger.info(f"Loaded environment from {envFile}")
    return loaded


def resolvePlaceholders(config: Any) -> Any:
    """
    Recursively resolve ${VAR_NAME} placeholders in configuration.

    Args:
        config: Configuration value (dict, list, str, or other)

    Returns:
        Configuration with placeholders resolved
    """
    if isinstance(config, dict):
        return {key: resolvePlaceholders(value) for key, value in config.items()}

    elif isinstance(config, list):
        return [resolvePlaceholders(item) for item in config]

    elif isinstance(config, str):
        return _resolveString(config)

    else:
        return config


def _lookup(match: re.Match) -> str:
    varName = match.group(1)
    defaultValue = match.group(2)

    envValue = os.environ.get(varName)

    if envValue is not None:
        logger.debug(f"Resolved {varName} from environment")
        return envValue
    elif defaultValue is not None:
        logger.debug(f"Using default for {varName}")
        return defaultValue
    else:
        logger.warning(f"Environment variable {varName} not set and no default")
        return match.group(0)


def _resolveString(value: str) -> Any:
    """
    Resolve placeholders in a string value.

    A string that is exactly one placeholder is converted to int, float,
    bool or None where the resolved text allows it.
    """
    wholeMatch = PLACEHOLDER_PATTERN.fullmatch(value)
    if wholeMatch:
        resolved = _lookup(wholeMatch)
        if resolved == wholeMatch.group(0):
            return resolved
        return coerceScalar(resolved)

    return PLACEHOLDER_PATTERN.sub(_lookup, value)


def coerceScalar(text: str) -> Any:
    """
    Convert resolved placeholder text to a scalar.

    Args:
        text: Resolved text

    Returns:
        int, float, bool, None, or the text unchanged
    """
    lowered = text.strip().lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    if lowered in ('null', 'none'):
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def loadConfigWithEnv(
    configPath: str,
    envPath: Optional[str] = None
) -> Dict[str, Any]:
    """
    Load a configuration file and resolve all placeholders.

    Args:
        configPath: Path to configuration JSON file
        envPath: Optional path to .env file

    Returns:
        Configuration dictionary with placeholders resolved

    Raises:
        FileNotFoundError: If config file doesn't exist
        json.JSONDecodeError: If config file is invalid JSON
    """
    loadEnvFile(envPath)

    configFile = Path(configPath)
    if not configFile.exists():
        raise FileNotFoundError(f"Configuration file not found: {configPath}")

    logger.info(f"Loading configuration from {configPath}")

    with open(configFile, 'r', encoding='utf-8') as f:
        config = json.load(f)

    config = resolvePlaceholders(config)

    logger.info("Configuration loaded and placeholders resolved")
    return config
