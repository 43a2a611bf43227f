"""Check-in orchestration and schedule adjustment flows."""

from goalpilot.checkins.adjustments import ScheduleAdjustmentService
from goalpilot.checkins.feedback import generate_feedback
from goalpilot.checkins.orchestrator import CheckInOrchestrator

__all__ = ["CheckInOrchestrator", "ScheduleAdjustmentService", "generate_feedback"]
