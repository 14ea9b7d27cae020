################################################################################
# File Name: monitor_cli.py
# Purpose/Description: Interactive console for driving the monitoring simulation
# Author: Michael Cornelison
# Creation Date: 2026-01-22
# Copyright: (c) 2026 VitalWatch Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-01-22    | M. Cornelison | Initial implementation for US-043
# 2026-10-14    | M. Cornelison | Line-based commands for cycles, subjects,
#               |              | emergencies and statistics
# ================================================================================
################################################################################

"""
Interactive console for the monitoring simulation.

Commands:
- r [n]               Run n monitoring cycles (default 1)
- a <id> <age> <name> Register a subject (devices attached when a factory is set)
- e [<id> <kind>]     Inject an emergency (prompts when arguments are missing)
- s                   Show statistics
- l                   List subjects
- d                   Drain the alert queue now
- h                   Show help
- q                   Quit

Emergency kinds: 1 cardiac-arrest, 2 respiratory-failure,
3 hypertensive-crisis, 4 hypothermia.

Usage:
    from simulator.monitor_cli import MonitorCli

    cli = MonitorCli(orchestrator, deviceFactory=factory)
    cli.run()               # reads commands until 'q' or end of input

    result = cli.executeCommand("e 1 cardiac-arrest")
"""

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from alert.types import DispatchRecord
from scheduler.emergency import EmergencyKind, parseEmergencyKind
from scheduler.exceptions import SchedulerError
from scheduler.orchestrator import SchedulingOrchestrator
from scheduler.sources import ReadingSource
from vitals.exceptions import VitalsError

logger = logging.getLogger(__name__)


# ================================================================================
# Constants
# ================================================================================

COMMAND_RUN = 'r'
COMMAND_REGISTER = 'a'
COMMAND_EMERGENCY = 'e'
COMMAND_STATS = 's'
COMMAND_LIST = 'l'
COMMAND_DRAIN = 'd'
COMMAND_HELP = 'h'
COMMAND_QUIT = 'q'

VALID_COMMANDS = {
    COMMAND_RUN, COMMAND_REGISTER, COMMAND_EMERGENCY, COMMAND_STATS,
    COMMAND_LIST, COMMAND_DRAIN, COMMAND_HELP, COMMAND_QUIT,
}

HELP_TEXT = """
Commands:
  r [n]               Run n monitoring cycles (default 1)
  a <id> <age> <name> Register a subject
  e [<id> <kind>]     Inject an emergency
  s                   Show statistics
  l                   List subjects
  d                   Drain the alert queue now
  h                   Show help
  q                   Quit
"""

EMERGENCY_MENU = """
Emergency types:
  1. Cardiac arrest
  2. Respiratory failure
  3. Hypertensive crisis
  4. Hypothermia
  x. Cancel
Enter <subject id> <type>: """


# ================================================================================
# Enums
# ================================================================================

class CliState(Enum):
    """State of the console."""

    STOPPED = "stopped"
    RUNNING = "running"
    AWAITING_EMERGENCY = "awaiting_emergency"


class CommandType(Enum):
    """Type of console command."""

    RUN_CYCLE = "run_cycle"
    REGISTER_SUBJECT = "register_subject"
    INJECT_EMERGENCY = "inject_emergency"
    STATS = "stats"
    LIST_SUBJECTS = "list_subjects"
    DRAIN = "drain"
    HELP = "help"
    QUIT = "quit"
    UNKNOWN = "unknown"


# ================================================================================
# Data Classes
# ================================================================================

@dataclass
class CommandResult:
    """
    Result of executing a console command.

    Attributes:
        command: The command type that was executed
        success: Whether the command executed successfully
        message: Human-readable result message
        details: Additional details about the result
    """

    command: CommandType
    success: bool
    message: str
    details: Dict[str, Any] = None

    def __post_init__(self) -> None:
        """Initialize details if not provided."""
        if self.details is None:
            self.details = {}

    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "command": self.command.value,
            "success": self.success,
            "message": self.message,
            "details": self.details,
        }


def formatDispatchRecord(record: DispatchRecord) -> str:
    """Format a dispatch record as one console line."""
    marker = "SLA met" if record.slaMet else "SLA MISSED"
    return (
        f"[{record.riskLevel.name}] Subject {record.subjectId}: {record.message}\n"
        f"    -> {record.responseAction} (response {record.responseMs}ms, {marker})"
    )


# ================================================================================
# MonitorCli Class
# ================================================================================

class MonitorCli:
    """
    Line-based console for the monitoring simulation.

    Example:
        cli = MonitorCli(orchestrator)
        cli.executeCommand("r 3")
        cli.executeCommand("s")
    """

    def __init__(
        self,
        orchestrator: SchedulingOrchestrator,
        deviceFactory: Optional[Callable[[int], List[ReadingSource]]] = None,
        outputStream: Any = None,
        inputStream: Any = None,
    ) -> None:
        """
        Initialize MonitorCli.

        Args:
            orchestrator: Orchestrator to drive
            deviceFactory: Creates the sources for a newly registered subject
            outputStream: Stream for output (default: sys.stdout)
            inputStream: Stream for input (default: sys.stdin)
        """
        self.orchestrator = orchestrator
        self.deviceFactory = deviceFactory
        self._outputStream = outputStream or sys.stdout
        self._inputStream = inputStream or sys.stdin

        self._state = CliState.STOPPED
        self._quitRequested = False
        self._commandCount = 0

        self._onCommand: Optional[Callable[[CommandType, CommandResult], None]] = None

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def run(self) -> int:
        """
        Read and execute commands until quit or end of input.

        Returns:
            Number of commands executed
        """
        self._state = CliState.RUNNING
        self._quitRequested = False
        self._showHelp()
        self._printPrompt()

        for line in self._inputStream:
            self.executeCommand(line)
            if self._quitRequested:
                break
            self._printPrompt()

        self._state = CliState.STOPPED
        logger.info(f"MonitorCli stopped | commands={self._commandCount}")
        return self._commandCount

    def shouldQuit(self) -> bool:
        return self._quitRequested

    @property
    def state(self) -> CliState:
        return self._state

    @property
    def commandCount(self) -> int:
        return self._commandCount

    def setOnCommand(self, callback: Callable[[CommandType, CommandResult], None]) -> None:
        """
        Set the callback invoked after each command.

        Args:
            callback: Function called with (CommandType, CommandResult)
        """
        self._onCommand = callback

    # ==========================================================================
    # Command Handling
    # ==========================================================================

    def executeCommand(self, line: str) -> CommandResult:
        """
        Execute one command line.

        Args:
            line: Raw input line

        Returns:
            CommandResult describing the outcome
        """
        text = line.strip()

        if self._state == CliState.AWAITING_EMERGENCY:
            self._state = CliState.RUNNING
            result = self._handleEmergencySelection(text)
        else:
            result = self._dispatchCommand(text)

        self._logCommand(result)
        if self._onCommand:
            try:
                self._onCommand(result.command, result)
            except Exception as e:
                logger.warning(f"Command callback error: {e}")
        return result

    def _dispatchCommand(self, text: str) -> CommandResult:
        if not text:
            return CommandResult(CommandType.UNKNOWN, False, "Empty command")

        parts = text.split()
        command, args = parts[0].lower(), parts[1:]
        self._commandCount += 1

        if command == COMMAND_RUN:
            return self._runCycles(args)
        if command == COMMAND_REGISTER:
            return self._registerSubject(args)
        if command == COMMAND_EMERGENCY:
            if not args:
                return self._promptEmergency()
            return self._handleEmergencySelection(' '.join(args))
        if command == COMMAND_STATS:
            return self._showStats()
        if command == COMMAND_LIST:
            return self._listSubjects()
        if command == COMMAND_DRAIN:
            return self._drain()
        if command == COMMAND_HELP:
            self._showHelp()
            return CommandResult(CommandType.HELP, True, "Help displayed")
        if command == COMMAND_QUIT:
            self._quitRequested = True
            self._print("\nShutting down monitoring.\n")
            return CommandResult(CommandType.QUIT, True, "Quit requested")

        self._print(f"Unknown command: {command} (h for help)\n")
        return CommandResult(CommandType.UNKNOWN, False, f"Unknown command: {command}")

    # ==========================================================================
    # Command Implementations
    # ==========================================================================

    def _runCycles(self, args: List[str]) -> CommandResult:
        try:
            cycles = int(args[0]) if args else 1
        except ValueError:
            return self._fail(CommandType.RUN_CYCLE, f"Invalid cycle count: {args[0]}")
        if cycles < 1:
            return self._fail(CommandType.RUN_CYCLE, "Cycle count must be at least 1")

        dispatched = 0
        for _ in range(cycles):
            records = self.orchestrator.runCycle()
            dispatched += len(records)
            cycle = self.orchestrator.lastCycle
            self._print(f"\n--- Cycle {cycle.cycleNumber if cycle else '?'} ---\n")
            self._printRecords(records)

        message = f"Ran {cycles} cycle(s), dispatched {dispatched} alert(s)"
        self._print(f"{message}\n")
        return CommandResult(
            CommandType.RUN_CYCLE, True, message,
            details={'cycles': cycles, 'dispatched': dispatched},
        )

    def _registerSubject(self, args: List[str]) -> CommandResult:
        if len(args) < 3:
            return self._fail(CommandType.REGISTER_SUBJECT, "Usage: a <id> <age> <name>")
        try:
            subjectId = int(args[0])
            age = int(args[1])
        except ValueError:
            return self._fail(CommandType.REGISTER_SUBJECT, "Subject id and age must be integers")
        name = ' '.join(args[2:])

        try:
            self.orchestrator.registerSubject(subjectId, name, age)
        except (SchedulerError, VitalsError) as e:
            return self._fail(CommandType.REGISTER_SUBJECT, e.message)

        deviceCount = 0
        if self.deviceFactory is not None:
            for source in self.deviceFactory(subjectId):
                self.orchestrator.attachSource(source)
                deviceCount += 1

        message = f"Registered subject {subjectId} ({name}, {age}) with {deviceCount} device(s)"
        self._print(f"{message}\n")
        return CommandResult(
            CommandType.REGISTER_SUBJECT, True, message,
            details={'subjectId': subjectId, 'devices': deviceCount},
        )

    def _promptEmergency(self) -> CommandResult:
        self._state = CliState.AWAITING_EMERGENCY
        self._print(EMERGENCY_MENU)
        return CommandResult(
            CommandType.INJECT_EMERGENCY, True, "Awaiting emergency selection",
        )

    def _handleEmergencySelection(self, text: str) -> CommandResult:
        if text.lower() in ('x', ''):
            self._print("Cancelled\n")
            return CommandResult(
                CommandType.INJECT_EMERGENCY, True, "Emergency injection cancelled",
            )

        parts = text.split()
        if len(parts) != 2:
            return self._fail(CommandType.INJECT_EMERGENCY, "Usage: e <subject id> <type>")

        try:
            subjectId = int(parts[0])
            emergencyKind: EmergencyKind = parseEmergencyKind(parts[1])
        except ValueError:
            return self._fail(CommandType.INJECT_EMERGENCY, f"Invalid selection: {text}")

        try:
            alerts = self.orchestrator.injectEmergency(subjectId, emergencyKind)
        except SchedulerError as e:
            return self._fail(CommandType.INJECT_EMERGENCY, e.message)

        message = (
            f"Emergency {emergencyKind.value} injected for subject {subjectId} "
            f"({len(alerts)} alert(s) queued)"
        )
        self._print(f"{message}\n")
        return CommandResult(
            CommandType.INJECT_EMERGENCY, True, message,
            details={
                'subjectId': subjectId,
                'kind': emergencyKind.value,
                'alertsQueued': len(alerts),
            },
        )

    def _showStats(self) -> CommandResult:
        stats = self.orchestrator.getStatistics()
        self._print("\n=== System Statistics ===\n")
        self._print(f"Total Subjects: {stats.subjectCount}\n")
        self._print(f"Total Devices: {stats.deviceCount}\n")
        self._print(f"Alerts Dispatched: {stats.alertsDispatched}\n")
        self._print(f"False Alarms Filtered: {stats.falseAlarmsSuppressed}\n")
        self._print(f"SLA Breaches: {stats.slaBreaches}\n")
        self._print(f"Pending Alerts: {stats.pendingAlerts}\n")
        self._print(f"Cycles Completed: {stats.cyclesCompleted}\n")
        return CommandResult(CommandType.STATS, True, "Statistics displayed", details=stats.toDict())

    def _listSubjects(self) -> CommandResult:
        summaries = self.orchestrator.getSubjectSummaries()
        self._print("\n=== Subjects ===\n")
        for summary in summaries:
            risk = summary['currentRisk'] or 'NO DATA'
            self._print(
                f"  {summary['subjectId']:>3}  {summary['name']:<20} "
                f"age {summary['age']:>3}  risk {risk}\n"
            )
        if not summaries:
            self._print("  (none)\n")
        return CommandResult(
            CommandType.LIST_SUBJECTS, True, f"{len(summaries)} subject(s)",
            details={'subjects': summaries},
        )

    def _drain(self) -> CommandResult:
        records = self.orchestrator.drainNow()
        self._printRecords(records)
        message = f"Dispatched {len(records)} alert(s)"
        self._print(f"{message}\n")
        return CommandResult(CommandType.DRAIN, True, message, details={'dispatched': len(records)})

    # ==========================================================================
    # Output
    # ==========================================================================

    def _fail(self, commandType: CommandType, message: str) -> CommandResult:
        self._print(f"Error: {message}\n")
        return CommandResult(commandType, False, message)

    def _printRecords(self, records: List[DispatchRecord]) -> None:
        if not records:
            self._print("No alerts.\n")
        for record in records:
            self._print(formatDispatchRecord(record) + "\n")

    def _showHelp(self) -> None:
        self._print(HELP_TEXT)

    def _printPrompt(self) -> None:
        self._print("> ")

    def _print(self, text: str) -> None:
        try:
            self._outputStream.write(text)
            self._outputStream.flush()
        except Exception as e:
            logger.debug(f"Output error: {e}")

    def _logCommand(self, result: CommandResult) -> None:
        if result.success:
            logger.debug(f"CLI command: {result.command.value} | {result.message}")
        else:
            logger.info(f"CLI command failed: {result.command.value} | {result.message}")
