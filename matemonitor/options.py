"""Command-line options that choose the tab shown at start-up."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class TabOptions:
    """Which tab the user asked to see first."""

    show_system_tab: bool = False
    show_processes_tab: bool = False
    show_resources_tab: bool = False
    show_file_systems_tab: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the tab-selection options."""
    parser = argparse.ArgumentParser(prog="matemonitor")
    parser.add_argument(
        "-s",
        "--show-system-tab",
        action="store_true",
        help="Show the System tab",
    )
    parser.add_argument(
        "-p",
        "--show-processes-tab",
        action="store_true",
        help="Show the Processes tab",
    )
    parser.add_argument(
        "-r",
        "--show-resources-tab",
        action="store_true",
        help="Show the Resources tab",
    )
    parser.add_argument(
        "-f",
        "--show-file-systems-tab",
        action="store_true",
        help="Show the File Systems tab",
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> TabOptions:
    """Parse *argv* (the process arguments when None) into TabOptions.

    Unknown options make the parser exit with SystemExit.
    """
    namespace = build_parser().parse_args(None if argv is None else list(argv))
    return TabOptions(
        show_system_tab=namespace.show_system_tab,
        show_processes_tab=namespace.show_processes_tab,
        show_resources_tab=namespace.show_resources_tab,
        show_file_systems_tab=namespace.show_file_systems_tab,
    )