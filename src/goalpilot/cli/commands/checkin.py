"""Check-in commands."""

from __future__ import annotations

import argparse

from goalpilot import CheckInPrompt, CheckInRecord, CheckInResponse, CheckInResult, Difficulty, ExpressCheckInResult
from goalpilot.cli.common import call_pilot, format_date, plural


def format_pending_summary(prompts: list[CheckInPrompt]) -> str:
    lines = ["", "goalpilot - pending check-ins", ""]
    if not prompts:
        lines.append("  All caught up")
    for prompt in prompts:
        marker = "!" if prompt.is_urgent else " "
        lines.append(
            f"  {marker} {prompt.step.id}  {plural(prompt.days_past_due, 'day')} overdue"
            f"  [{prompt.goal.title}] {prompt.step.title}".rstrip()
        )
    lines.append("")
    return "\n".join(lines)


def format_checkin_summary(result: CheckInResult) -> str:
    feedback = result.feedback
    lines = ["", f"goalpilot - check-in {result.check_in_id} recorded", "", f"  {feedback.encouragement}"]
    if feedback.advisor_message:
        lines.append(f"  {feedback.advisor_message}")
    if feedback.suggestions:
        lines.append("")
        lines.append("  Suggestions:")
        lines.extend(f"    - {suggestion}" for suggestion in feedback.suggestions)
    if feedback.next_steps:
        lines.append("")
        lines.append("  Next:")
        lines.extend(f"    - {next_step}" for next_step in feedback.next_steps)
    lines.append("")
    lines.append(f"  Step:      {result.step.id} ({result.step.status.value}, due {format_date(result.step.due_date)})")
    if result.extension_days is not None:
        lines.append(f"  Extended:  {plural(result.extension_days, 'day')}")
    if feedback.adjustments.break_down_step:
        lines.append("  Flagged:   break this step down")
    lines.append("")
    return "\n".join(lines)


def format_history_summary(records: list[CheckInRecord]) -> str:
    lines = ["", "goalpilot - check-in history", ""]
    if not records:
        lines.append("  No check-ins in this window")
    for record in records:
        status = "done" if record.completed else "open"
        lines.append(
            f"  {record.date.isoformat()}  {record.goal_id}  {record.step_id or '-'}"
            f"  confidence {record.confidence or '-'}  {status}  {record.source.value}"
        )
    lines.append("")
    return "\n".join(lines)


def format_express_summary(step_id: str, result: ExpressCheckInResult) -> str:
    return f"\ngoalpilot - {step_id} completed (check-in {result.id}, +{result.points} points)\n"


async def run_checkins(args: argparse.Namespace) -> list[CheckInPrompt]:
    import goalpilot.cli as cli

    prompts = await call_pilot(args, lambda pilot: pilot.pending_check_ins())
    print(cli._format_pending_summary(prompts))
    return prompts


async def run_checkin(args: argparse.Namespace) -> CheckInResult:
    import goalpilot.cli as cli

    response = CheckInResponse(
        step_id=args.step,
        completed=args.completed,
        confidence=args.confidence,
        blockers=args.blockers,
        needs_help=args.needs_help,
        reflection=args.reflection,
        minutes_spent=args.minutes,
    )
    result = await call_pilot(args, lambda pilot: pilot.record_check_in(response), show_progress=True)
    print(cli._format_checkin_summary(result))
    return result


async def run_express(args: argparse.Namespace) -> ExpressCheckInResult:
    import goalpilot.cli as cli

    result = await call_pilot(args, lambda pilot: pilot.express_check_in(args.step, args.source))
    print(cli._format_express_summary(args.step, result))
    return result


async def run_history(args: argparse.Namespace) -> list[CheckInRecord]:
    import goalpilot.cli as cli

    records = await call_pilot(args, lambda pilot: pilot.check_in_history(args.goal, args.days))
    print(cli._format_history_summary(records))
    return records


async def run_rate(args: argparse.Namespace) -> None:
    rating = Difficulty(args.difficulty)
    await call_pilot(args, lambda pilot: pilot.rate_check_in(args.check_in, rating))
    print(f"\ngoalpilot - check-in {args.check_in} rated {rating.value} (confidence {rating.confidence})\n")


__all__ = [
    "format_checkin_summary",
    "format_express_summary",
    "format_history_summary",
    "format_pending_summary",
    "run_checkin",
    "run_checkins",
    "run_express",
    "run_history",
    "run_rate",
]
