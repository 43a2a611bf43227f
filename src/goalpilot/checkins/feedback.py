"""Adaptive check-in feedback.

A fixed decision table keyed on completion and confidence.  The same response
always yields the same feedback.
"""

from __future__ import annotations

from goalpilot.contracts.checkin import CheckInFeedback, CheckInResponse, FeedbackAdjustments

COMPLETED_ENCOURAGEMENT = "Amazing work completing that step! 🎉 You're building real momentum toward your goal."
COMPLETED_NEXT_STEPS = (
    "Take a moment to celebrate this win",
    "Review what worked well in your approach",
    "Get ready for your next step",
)

LOW_CONFIDENCE_ENCOURAGEMENT = (
    "It's completely normal to feel stuck sometimes. Let's break this down into smaller pieces you can tackle."
)
LOW_CONFIDENCE_SUGGESTIONS = (
    "Break this step into 2-3 smaller actions",
    "Set aside just 10 minutes to get started",
    "Ask for help or guidance on the specific challenge",
)

MEDIUM_CONFIDENCE_ENCOURAGEMENT = (
    "You're closer than you think! Sometimes we just need a different approach or more time."
)
MEDIUM_CONFIDENCE_SUGGESTIONS = (
    "Try a different approach to this step",
    "Set a specific time to focus on this tomorrow",
    "Remove any distractions when you tackle this",
)

HIGH_CONFIDENCE_ENCOURAGEMENT = (
    "You've got this! Sounds like you know what to do - you might just need more time or to remove a small obstacle."
)
HIGH_CONFIDENCE_SUGGESTIONS = (
    "Schedule focused time to complete this step",
    "Identify what's preventing completion",
    "Set a realistic new deadline",
)

BLOCKER_SUGGESTION = "Address the specific blocker you mentioned"
HELP_SUGGESTION = "Get personalized guidance through step chat"


def generate_feedback(response: CheckInResponse) -> CheckInFeedback:
    """Map a check-in response onto encouragement, suggestions and adjustments.

    | completed | confidence | adjustments                           |
    |-----------|------------|---------------------------------------|
    | yes       | any        | none                                  |
    | no        | <= 2       | break_down_step, add_scaffolding      |
    | no        | 3          | extend_due_date                       |
    | no        | >= 4       | extend_due_date                       |
    """
    if response.completed:
        return CheckInFeedback(
            encouragement=COMPLETED_ENCOURAGEMENT,
            next_steps=list(COMPLETED_NEXT_STEPS),
        )

    if response.confidence <= 2:
        encouragement = LOW_CONFIDENCE_ENCOURAGEMENT
        suggestions = list(LOW_CONFIDENCE_SUGGESTIONS)
        adjustments = FeedbackAdjustments(break_down_step=True, add_scaffolding=True)
    elif response.confidence == 3:
        encouragement = MEDIUM_CONFIDENCE_ENCOURAGEMENT
        suggestions = list(MEDIUM_CONFIDENCE_SUGGESTIONS)
        adjustments = FeedbackAdjustments(extend_due_date=True)
    else:
        encouragement = HIGH_CONFIDENCE_ENCOURAGEMENT
        suggestions = list(HIGH_CONFIDENCE_SUGGESTIONS)
        adjustments = FeedbackAdjustments(extend_due_date=True)

    if response.blockers and response.blockers.strip():
        suggestions.insert(0, BLOCKER_SUGGESTION)
    if response.needs_help:
        suggestions.append(HELP_SUGGESTION)

    return CheckInFeedback(encouragement=encouragement, suggestions=suggestions, adjustments=adjustments)
