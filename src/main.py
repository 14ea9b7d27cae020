################################################################################
# File Name: main.py
# Purpose/Description: Main application entry point
# Author: Michael Cornelison
# Creation Date: 2026-01-21
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-21    | M. Cornelison | Initial implementation
# 2026-10-16    | M. Cornelison | Monitoring cycles, interactive console,
#               |              | typed settings, --cycles/--seed flags
# ================================================================================
################################################################################

"""
Main application entry point.

This module provides the main entry point for the application with:
- CLI argument parsing
- Configuration loading and validation
- Simulated monitoring run (fixed number of cycles) or interactive console
- Error handling and exit codes

Usage:
    python src/main.py --help
    python src/main.py --config path/to/config.json
    python src/main.py --cycles 10 --seed 42
    python src/main.py --interactive
    python src/main.py --dry-run
"""

import argparse
import random
import sys
from pathlib import Path
from typing import Any, List, Optional

# Resolve project paths relative to this script (not CWD)
srcPath = Path(__file__).resolve().parent
projectRoot = srcPath.parent
if str(srcPath) not in sys.path:
    sys.path.insert(0, str(srcPath))

DEFAULT_CONFIG = str(srcPath / 'monitor_config.json')
DEFAULT_ENV = str(projectRoot / '.env')

from alert.helpers import validateAlertConfig
from common.config_loader import loadConfigWithEnv
from common.config_validator import ConfigValidationError, ConfigValidator
from common.error_handler import ConfigurationError, handleError
from common.logging_config import getLogger, setupLogging
from common.settings import MonitorSettings, loadSettings
from scheduler.exceptions import SchedulerError
from scheduler.helpers import (
    createOrchestratorFromConfig,
    registerConfiguredSubjects,
    validateMonitoringConfig,
)
from scheduler.orchestrator import SchedulingOrchestrator
from scheduler.types import SystemStatistics
from simulator.device import createDevicesForSubject
from simulator.monitor_cli import MonitorCli
from vitals.exceptions import VitalsError
from vitals.types import parseVitalKind

__version__ = '1.0.0'

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 2
EXIT_UNKNOWN_ERROR = 3


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (sys.argv[1:] when omitted)

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='VitalWatch - vital-sign alert scheduling (simulated bedside devices)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py                       Run the configured number of cycles
  python main.py --cycles 20 --seed 7  Reproducible 20-cycle run
  python main.py --interactive         Interactive console
  python main.py --dry-run             Validate configuration only
  python main.py --verbose             Run with debug logging
        '''
    )

    parser.add_argument(
        '--config', '-c',
        default=DEFAULT_CONFIG,
        help='Path to configuration file (default: src/monitor_config.json)'
    )

    parser.add_argument(
        '--env-file', '-e',
        default=DEFAULT_ENV,
        help='Path to environment file (default: .env)'
    )

    parser.add_argument(
        '--cycles', '-n',
        type=int,
        default=None,
        help='Number of monitoring cycles (overrides monitoring.cycles)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for the simulated devices (overrides simulator.seed)'
    )

    parser.add_argument(
        '--interactive', '-i',
        action='store_true',
        help='Start the interactive monitoring console'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate configuration without running'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser.parse_args(argv)


def loadConfiguration(
    configPath: str,
    envPath: str | None = None
) -> dict:
    """
    Load and validate configuration.

    Args:
        configPath: Path to configuration file
        envPath: Path to environment file

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    logger = getLogger(__name__)

    try:
        config = loadConfigWithEnv(configPath, envPath)

        validator = ConfigValidator()
        config = validator.validate(config)

    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {e}") from e
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        raise ConfigurationError(f"Configuration file is not valid JSON: {e}") from e
    except ConfigValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e

    errors = validateAlertConfig(config) + validateMonitoringConfig(config)
    if errors:
        raise ConfigurationError(
            f"Configuration validation failed: {'; '.join(errors)}",
            details={'errors': errors}
        )

    logger.info(f"Configuration loaded from {configPath}")
    return config


def attachSimulatedDevices(
    orchestrator: SchedulingOrchestrator,
    settings: MonitorSettings,
    rng: random.Random
) -> int:
    """
    Attach the configured device set to every registered subject.

    Returns:
        Number of devices attached
    """
    vitals = [parseVitalKind(name) for name in settings.simulator.vitals]
    nextDeviceId = 1
    for summary in orchestrator.getSubjectSummaries():
        devices = createDevicesForSubject(
            summary['subjectId'],
            rng=rng,
            vitals=vitals,
            firstDeviceId=nextDeviceId,
            spikeProbability=settings.simulator.spikeProbability,
        )
        for device in devices:
            orchestrator.attachSource(device)
        nextDeviceId += len(devices)
    return nextDeviceId - 1


def printStatistics(stats: SystemStatistics, stream: Any = None) -> None:
    """
    Print the final statistics block.

    Args:
        stats: Statistics snapshot
        stream: Output stream (default: sys.stdout)
    """
    out = stream or sys.stdout
    out.write("\n=== System Statistics ===\n")
    out.write(f"Total Subjects: {stats.subjectCount}\n")
    out.write(f"Total Devices: {stats.deviceCount}\n")
    out.write(f"Readings Processed: {stats.readingsProcessed}\n")
    out.write(f"Alerts Dispatched: {stats.alertsDispatched}\n")
    out.write(f"Trend Alerts: {stats.trendAlerts}\n")
    out.write(f"False Alarms Filtered: {stats.falseAlarmsSuppressed}\n")
    out.write(f"SLA Breaches: {stats.slaBreaches}\n")
    out.write(f"Cycles Completed: {stats.cyclesCompleted}\n")


def runWorkflow(
    config: dict,
    settings: MonitorSettings,
    cycles: Optional[int] = None,
    seed: Optional[int] = None,
    interactive: bool = False,
    dryRun: bool = False
) -> int:
    """
    Execute the monitoring workflow.

    Args:
        config: Validated configuration dictionary
        settings: Typed settings parsed from the same configuration
        cycles: Cycle count override
        seed: Random seed override
        interactive: Start the console instead of a fixed run
        dryRun: If True, validate config but don't run

    Returns:
        Exit code: 0 on success, non-zero for errors
    """
    logger = getLogger(__name__)

    if dryRun:
        logger.info("DRY RUN MODE - Validating config without running")
        logger.info(
            f"Configuration is valid | subjects={len(settings.subjects)} | "
            f"cycles={settings.monitoring.cycles}"
        )
        return EXIT_SUCCESS

    effectiveSeed = seed if seed is not None else settings.simulator.seed
    rng = random.Random(effectiveSeed)
    logger.info(f"Starting workflow | seed={effectiveSeed}")

    try:
        orchestrator = createOrchestratorFromConfig(config)
        registerConfiguredSubjects(orchestrator, config)
        deviceCount = attachSimulatedDevices(orchestrator, settings, rng)
        logger.info(
            f"Monitoring {len(settings.subjects)} subjects with {deviceCount} devices"
        )
    except (SchedulerError, VitalsError) as e:
        logger.error(f"Workflow setup failed: {e}")
        return EXIT_CONFIG_ERROR

    try:
        if interactive:
            vitals = [parseVitalKind(name) for name in settings.simulator.vitals]

            def deviceFactory(subjectId: int) -> list:
                return createDevicesForSubject(
                    subjectId,
                    rng=rng,
                    vitals=vitals,
                    firstDeviceId=orchestrator.getStatistics().deviceCount + 1,
                    spikeProbability=settings.simulator.spikeProbability,
                )

            MonitorCli(orchestrator, deviceFactory=deviceFactory).run()
        else:
            cycleCount = cycles if cycles is not None else settings.monitoring.cycles
            for _ in range(cycleCount):
                orchestrator.runCycle()

    except KeyboardInterrupt:
        logger.warning("Monitoring interrupted by user")

    except Exception as e:
        logger.error(f"Workflow error: {e}", exc_info=True)
        return EXIT_RUNTIME_ERROR

    if orchestrator.errors.hasErrors():
        orchestrator.errors.report()

    printStatistics(orchestrator.getStatistics())
    logger.info(f"Workflow completed | {orchestrator.getStatistics().toDict()}")
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Argument list (sys.argv[1:] when omitted)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parseArgs(argv)

    logLevel = 'DEBUG' if args.verbose else 'INFO'
    setupLogging(level=logLevel)
    logger = getLogger(__name__)

    logger.info("=" * 60)
    logger.info("VitalWatch starting...")
    logger.info("=" * 60)

    try:
        config = loadConfiguration(args.config, args.env_file)
        settings = loadSettings(config)

        if not args.verbose:
            setupLogging(
                level=settings.logging.level,
                logFile=settings.logging.file,
                enablePIIMasking=settings.logging.maskPII,
                loggerLevels=settings.logging.loggerLevels,
            )

        if args.cycles is not None and args.cycles < 0:
            raise ConfigurationError(f"--cycles must be non-negative, got {args.cycles}")

        exitCode = runWorkflow(
            config,
            settings,
            cycles=args.cycles,
            seed=args.seed,
            interactive=args.interactive,
            dryRun=args.dry_run
        )

        if exitCode == EXIT_SUCCESS:
            logger.info("Application completed successfully")
        else:
            logger.warning(f"Application completed with exit code {exitCode}")

        return exitCode

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    except KeyboardInterrupt:
        logger.warning("Application interrupted by user")
        return EXIT_RUNTIME_ERROR

    except Exception as e:
        handleError(e, reraise=False)
        logger.error(f"Unexpected error: {e}")
        return EXIT_UNKNOWN_ERROR

    finally:
        logger.info("=" * 60)
        logger.info("Application finished")
        logger.info("=" * 60)


if __name__ == '__main__':
    sys.exit(main())
