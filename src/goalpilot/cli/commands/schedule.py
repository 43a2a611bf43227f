"""Schedule, milestone, extension and frequency commands."""

from __future__ import annotations

import argparse

from goalpilot import AdjustmentResponse, MilestoneGroup, ScheduleResult
from goalpilot.cli.common import call_pilot, format_date, plural


def format_schedule_summary(result: ScheduleResult) -> str:
    lines = ["", "goalpilot - schedule complete", "", f"  Goal:      {result.goal_id}"]
    if result.cadence is not None:
        cadence = result.cadence
        line = (
            f"  Cadence:   {cadence.frequency.value}, every {plural(cadence.interval_days, 'day')}"
            f" from {cadence.start_date.isoformat()}"
        )
        if cadence.duration_label:
            line += f" ({cadence.duration_label})"
        lines.append(line)
    if not result.steps:
        lines.append("  Status:    no steps to schedule")
        lines.append("")
        return "\n".join(lines)

    lines.append(f"  Steps:     {plural(len(result.steps), 'step')} scheduled")
    if result.fallback_used:
        lines.append("  Warning:   dependencies could not be fully satisfied; ordered by order_index")
    lines.append("")
    for step in result.steps:
        lines.append(f"  {format_date(step.due_date)}  {step.id}  {step.title}".rstrip())
    lines.append("")
    return "\n".join(lines)


def format_milestones_summary(goal_id: str, groups: list[MilestoneGroup]) -> str:
    lines = ["", f"goalpilot - milestones for {goal_id}", ""]
    if not groups:
        lines.append("  No steps yet")
    for group in groups:
        step_ids = ", ".join(step.id for step in group.steps)
        lines.append(f"  {group.title:<13} due {format_date(group.due_date):<11}  {step_ids}")
    lines.append("")
    return "\n".join(lines)


def format_adjustment_summary(response: AdjustmentResponse) -> str:
    status = "done" if response.success else "not applied"
    lines = ["", f"goalpilot - adjustment {status}", "", f"  {response.message}"]
    if response.new_due_date is not None:
        lines.append(f"  New due:   {response.new_due_date.isoformat()}")
    if response.success:
        lines.append(f"  Affected:  {plural(response.affected_steps, 'other step')}")
    lines.append("")
    return "\n".join(lines)


async def run_schedule(args: argparse.Namespace) -> ScheduleResult:
    import goalpilot.cli as cli

    result = await call_pilot(args, lambda pilot: pilot.schedule_goal(args.goal), show_progress=True)
    print(cli._format_schedule_summary(result))
    return result


async def run_milestones(args: argparse.Namespace) -> list[MilestoneGroup]:
    import goalpilot.cli as cli

    groups = await call_pilot(args, lambda pilot: pilot.milestones(args.goal))
    print(cli._format_milestones_summary(args.goal, groups))
    return groups


async def run_extend(args: argparse.Namespace) -> AdjustmentResponse:
    import goalpilot.cli as cli

    response = await call_pilot(
        args,
        lambda pilot: pilot.request_extension(args.step, args.reason, extension_days=args.days),
        show_progress=True,
    )
    print(cli._format_adjustment_summary(response))
    return response


async def run_frequency(args: argparse.Namespace) -> AdjustmentResponse:
    import goalpilot.cli as cli

    response = await call_pilot(
        args,
        lambda pilot: pilot.change_frequency(args.goal, args.step, args.frequency),
        show_progress=True,
    )
    print(cli._format_adjustment_summary(response))
    return response


__all__ = [
    "format_adjustment_summary",
    "format_milestones_summary",
    "format_schedule_summary",
    "run_extend",
    "run_frequency",
    "run_milestones",
    "run_schedule",
]
