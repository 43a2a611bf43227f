"""Upcoming milestone scan command."""

from __future__ import annotations

import argparse

from goalpilot import UpcomingMilestone
from goalpilot.cli.common import call_pilot, format_date, plural


def format_scan_summary(upcoming: list[UpcomingMilestone]) -> str:
    lines = ["", "goalpilot - upcoming milestones", ""]
    if not upcoming:
        lines.append("  Nothing due soon")
    for entry in upcoming:
        milestone = entry.milestone
        lines.append(
            f"  {entry.goal_id}  {milestone.title} due {format_date(milestone.due_date)}"
            f" ({plural(len(milestone.steps), 'step')})"
        )
    lines.append("")
    return "\n".join(lines)


async def run_scan(args: argparse.Namespace) -> list[UpcomingMilestone]:
    import goalpilot.cli as cli

    upcoming = await call_pilot(args, lambda pilot: pilot.scan_upcoming())
    print(cli._format_scan_summary(upcoming))
    return upcoming


__all__ = ["format_scan_summary", "run_scan"]
