"""Command-line interface for goalpilot."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from goalpilot import ConfigError as ConfigError
from goalpilot import GoalPilot as GoalPilot
from goalpilot import load_config as load_config
from goalpilot.cli.app import main as main
from goalpilot.cli.commands import checkin as checkin_command
from goalpilot.cli.commands import scan as scan_command
from goalpilot.cli.commands import schedule as schedule_command
from goalpilot.cli.parser import build_parser as build_parser

_format_schedule_summary = schedule_command.format_schedule_summary
_format_milestones_summary = schedule_command.format_milestones_summary
_format_adjustment_summary = schedule_command.format_adjustment_summary
_format_scan_summary = scan_command.format_scan_summary
_format_pending_summary = checkin_command.format_pending_summary
_format_checkin_summary = checkin_command.format_checkin_summary
_format_history_summary = checkin_command.format_history_summary
_format_express_summary = checkin_command.format_express_summary

_COMMANDS = {
    "schedule": schedule_command.run_schedule,
    "milestones": schedule_command.run_milestones,
    "extend": schedule_command.run_extend,
    "frequency": schedule_command.run_frequency,
    "scan": scan_command.run_scan,
    "checkins": checkin_command.run_checkins,
    "checkin": checkin_command.run_checkin,
    "express": checkin_command.run_express,
    "history": checkin_command.run_history,
    "rate": checkin_command.run_rate,
}
