"""Command-line entry point.

``py-vmsim [WORKLOAD] [--machine CONFIG.json] [--verbose]``

Reads the workload (``search.txt`` by default), builds the system,
runs it to completion, and prints the swap notices followed by the
page access summary.  ``--verbose`` adds a line per search started.

The helpers (``build_parser``, ``render``) are pure and testable;
``main`` is the thin I/O wrapper and returns the process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from py_vmsim.config import ConfigError, MachineConfig
from py_vmsim.loader import load_machine_config, load_workload
from py_vmsim.logging import Logger, LogLevel
from py_vmsim.scheduler import MemoryStarvationError, Scheduler
from py_vmsim.stats import Report, format_report
from py_vmsim.system import SystemState

DEFAULT_WORKLOAD = Path("search.txt")

_EXIT_OK = 0
_EXIT_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="py-vmsim",
        description="Simulate demand paging with whole-process swapping.",
    )
    parser.add_argument(
        "workload",
        nargs="?",
        type=Path,
        default=DEFAULT_WORKLOAD,
        help="workload file (default: search.txt)",
    )
    parser.add_argument(
        "--machine",
        type=Path,
        default=None,
        help="JSON machine configuration overriding the defaults",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log every search as it starts",
    )
    return parser


def render(logger: Logger, report: Report) -> str:
    """Render the log lines and the final summary as console text."""
    lines = [
        f"\t{entry.message}" if entry.level is LogLevel.DEBUG else f"+++ {entry.message}"
        for entry in logger.entries
        if entry.source != "kernel"
    ]
    lines.append(format_report(report))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Run the simulator from the command line.

    Returns:
        0 on success, 1 on a configuration or starvation error.

    """
    args = build_parser().parse_args(argv)
    threshold = LogLevel.DEBUG if args.verbose else LogLevel.INFO

    try:
        config = (
            load_machine_config(args.machine) if args.machine is not None else MachineConfig()
        )
        workload = load_workload(args.workload, config=config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)  # noqa: T201
        return _EXIT_ERROR

    print("+++ Simulation data read from file")  # noqa: T201
    logger = Logger(threshold=threshold)
    system = SystemState.create(workload, config=config, logger=logger)
    print("+++ Kernel data initialized")  # noqa: T201

    try:
        report = Scheduler(system).run()
    except MemoryStarvationError as e:
        print(f"error: {e}", file=sys.stderr)  # noqa: T201
        return _EXIT_ERROR

    print(render(logger, report))  # noqa: T201
    return _EXIT_OK


def run() -> None:
    """Console-script wrapper around ``main``."""
    sys.exit(main())
