"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("goalpilot")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default="./goalpilot.json", help="Path to goalpilot.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def _confidence(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"confidence must be an integer: {value!r}") from exc
    if not 1 <= parsed <= 5:
        raise argparse.ArgumentTypeError("confidence must be between 1 and 5")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="goalpilot")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    schedule_parser = subparsers.add_parser("schedule", help="Assign due dates to a goal's steps")
    schedule_parser.add_argument("--goal", required=True, help="Goal id")
    _add_common(schedule_parser)

    milestones_parser = subparsers.add_parser("milestones", help="Show a goal's milestone groups")
    milestones_parser.add_argument("--goal", required=True, help="Goal id")
    _add_common(milestones_parser)

    extend_parser = subparsers.add_parser("extend", help="Give a step more time and cascade downstream")
    extend_parser.add_argument("--step", required=True, help="Step id")
    extend_parser.add_argument(
        "--days", type=int, default=None, help="Extension in days (default: based on the step's effort)"
    )
    extend_parser.add_argument("--reason", default=None, help="Why more time is needed")
    _add_common(extend_parser)

    frequency_parser = subparsers.add_parser("frequency", help="Re-space future steps at a new frequency")
    frequency_parser.add_argument("--goal", required=True, help="Goal id")
    frequency_parser.add_argument("--step", required=True, help="Step to anchor on")
    frequency_parser.add_argument(
        "--frequency", required=True, help="daily, every other day, weekly or bi-weekly"
    )
    _add_common(frequency_parser)

    scan_parser = subparsers.add_parser("scan", help="List milestones falling due soon")
    _add_common(scan_parser)

    checkins_parser = subparsers.add_parser("checkins", help="List steps waiting for a check-in")
    _add_common(checkins_parser)

    checkin_parser = subparsers.add_parser("checkin", help="Record a check-in for a step")
    checkin_parser.add_argument("--step", required=True, help="Step id")
    checkin_parser.add_argument("--confidence", required=True, type=_confidence, help="Confidence from 1 to 5")
    checkin_parser.add_argument("--completed", action="store_true", help="The step is done")
    checkin_parser.add_argument("--blockers", default=None, help="What is in the way")
    checkin_parser.add_argument("--needs-help", action="store_true", help="Ask for guided help")
    checkin_parser.add_argument("--reflection", default=None, help="Free-text reflection")
    checkin_parser.add_argument("--minutes", type=int, default=None, help="Minutes spent")
    _add_common(checkin_parser)

    express_parser = subparsers.add_parser("express", help="Mark a step done with a one-tap check-in")
    express_parser.add_argument("--step", required=True, help="Step id")
    express_parser.add_argument("--source", choices=["express", "modal"], default="express")
    _add_common(express_parser)

    history_parser = subparsers.add_parser("history", help="Show recent check-ins")
    history_parser.add_argument("--goal", default=None, help="Only this goal")
    history_parser.add_argument("--days", type=int, default=30, help="Look-back window in days (default: 30)")
    _add_common(history_parser)

    rate_parser = subparsers.add_parser("rate", help="Rate how hard a checked-in step was")
    rate_parser.add_argument("--check-in", dest="check_in", required=True, help="Check-in id")
    rate_parser.add_argument("--difficulty", required=True, choices=["easy", "medium", "hard"])
    _add_common(rate_parser)

    return parser


__all__ = ["build_parser"]
