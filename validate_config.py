#!/usr/bin/env python3
################################################################################
# File Name: validate_config.py
# Purpose/Description: Validate project configuration before running
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-16    | M. Cornelison | Monitoring config sections and typed settings
# ================================================================================
################################################################################

"""
Configuration validation script.

Run this script to validate your configuration before running the application.

Usage:
    python validate_config.py
    python validate_config.py --config path/to/config.json
    python validate_config.py --verbose
"""

import argparse
import os
import sys
from pathlib import Path

# Add src to path
srcPath = Path(__file__).parent / 'src'
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

from alert.helpers import validateAlertConfig
from common.config_loader import PLACEHOLDER_PATTERN, loadConfigWithEnv, loadEnvFile
from common.config_validator import ConfigValidationError, ConfigValidator
from common.error_handler import ConfigurationError
from common.settings import loadSettings
from scheduler.helpers import validateMonitoringConfig

# Variables the default configuration reads; all have defaults
OPTIONAL_ENV_VARS = ['VITALWATCH_ENV', 'LOG_LEVEL', 'LOG_FILE', 'VITALWATCH_CYCLES', 'VITALWATCH_SEED']


def printHeader(message: str) -> None:
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {message}")
    print("=" * 60)


def printStatus(label: str, status: bool, details: str = "") -> None:
    """Print a status line with check mark or X."""
    icon = "[OK]" if status else "[X]"
    detail = f" - {details}" if details else ""
    print(f"  {icon} {label}{detail}")


def validateEnvironment(envPath: str = '.env', verbose: bool = False) -> bool:
    """Report environment overrides. A missing .env file is not an error."""
    printHeader("Environment Variables")

    if loadEnvFile(envPath):
        printStatus(".env file loaded", True, envPath)
    else:
        printStatus(".env file loaded", True, "not present, using defaults")

    if verbose:
        for var in OPTIONAL_ENV_VARS:
            # Values are not printed
            printStatus(var, True, "set" if os.environ.get(var) else "default")

    return True


def validateConfig(configPath: str, envPath: str = '.env', verbose: bool = False) -> bool:
    """Validate configuration file."""
    printHeader("Configuration File")

    configFile = Path(configPath)

    if not configFile.exists():
        printStatus("Config file exists", False, f"{configPath} not found")
        return False

    printStatus("Config file exists", True, configPath)

    try:
        config = loadConfigWithEnv(configPath, envPath)
        validator = ConfigValidator()
        config = validator.validate(config)

        printStatus("Config format valid", True)
        printStatus("Required fields present", True)

        unresolved = _findUnresolved(config)
        printStatus(
            "Placeholders resolved", not unresolved,
            ', '.join(unresolved) if unresolved else ""
        )

        errors = validateAlertConfig(config) + validateMonitoringConfig(config)
        printStatus("Alert and monitoring sections valid", not errors)
        for error in errors:
            print(f"    - {error}")

        settings = loadSettings(config)
        printStatus("Typed settings valid", True)

        if verbose:
            print()
            print(f"  Subjects: {len(settings.subjects)}")
            print(f"  Cycles: {settings.monitoring.cycles}")
            print(f"  Simulated vitals: {', '.join(settings.simulator.vitals)}")
            print("  Configuration sections:")
            for key in config.keys():
                print(f"    - {key}")

        return not errors and not unresolved

    except ConfigValidationError as e:
        printStatus("Configuration valid", False, str(e))
        if e.missingFields:
            print()
            print("  Missing fields:")
            for field in e.missingFields:
                print(f"    - {field}")
        return False

    except ConfigurationError as e:
        printStatus("Typed settings valid", False)
        for problem in e.details.get('errors', [str(e)]):
            print(f"    - {problem}")
        return False

    except Exception as e:
        printStatus("Configuration valid", False, str(e))
        return False


def _findUnresolved(value, path: str = '') -> list:
    """Dot paths of strings still holding a ${VAR} placeholder."""
    if isinstance(value, dict):
        found = []
        for key, item in value.items():
            found.extend(_findUnresolved(item, f"{path}.{key}" if path else key))
        return found
    if isinstance(value, list):
        found = []
        for index, item in enumerate(value):
            found.extend(_findUnresolved(item, f"{path}[{index}]"))
        return found
    if isinstance(value, str) and PLACEHOLDER_PATTERN.search(value):
        return [path]
    return []


def validateDependencies(verbose: bool = False) -> bool:
    """Validate Python dependencies are installed."""
    printHeader("Dependencies")

    requiredPackages = [
        ('python-dotenv', 'dotenv'),
        ('pydantic', 'pydantic'),
    ]

    allInstalled = True

    for packageName, importName in requiredPackages:
        try:
            __import__(importName)
            printStatus(packageName, True)
        except ImportError:
            printStatus(packageName, False, "not installed")
            allInstalled = False

    if not allInstalled:
        print()
        print("  To fix: pip install -e .")

    return allInstalled


def validateProjectStructure(verbose: bool = False) -> bool:
    """Validate project folder structure."""
    printHeader("Project Structure")

    requiredPaths = [
        'src/',
        'src/common/',
        'src/vitals/',
        'src/analysis/',
        'src/alert/',
        'src/scheduler/',
        'src/simulator/',
        'src/monitor_config.json',
        'tests/',
        'pyproject.toml',
    ]

    allExist = True

    for path in requiredPaths:
        exists = Path(path).exists()
        printStatus(path, exists)
        if not exists:
            allExist = False

    return allExist


def main() -> int:
    """Run all validations."""
    parser = argparse.ArgumentParser(description='Validate project configuration')
    parser.add_argument('--config', '-c', default='src/monitor_config.json',
                        help='Path to configuration file')
    parser.add_argument('--env-file', '-e', default='.env',
                        help='Path to environment file')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show detailed output')
    args = parser.parse_args()

    print()
    print("Configuration Validation")
    print("========================")

    results = []

    results.append(('Project Structure', validateProjectStructure(args.verbose)))
    results.append(('Dependencies', validateDependencies(args.verbose)))
    results.append(('Environment', validateEnvironment(args.env_file, args.verbose)))
    results.append(('Configuration', validateConfig(args.config, args.env_file, args.verbose)))

    printHeader("Summary")

    allPassed = True
    for name, passed in results:
        printStatus(name, passed)
        if not passed:
            allPassed = False

    print()
    if allPassed:
        print("All validations passed! Ready to run.")
        return 0
    else:
        print("Some validations failed. Please fix the issues above.")
        return 1


if __name__ == '__main__':
    sys.exit(main())
