"""Schedule advisor backed by a Supabase edge function."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from goalpilot.contracts.advisor import ScheduleAdvisor
from goalpilot.contracts.exceptions import AdvisoryUnavailableError, RepositoryError
from goalpilot.contracts.schedule import AdjustmentRequest, AdvisoryAdvice
from goalpilot.repositories.supabase.client import SupabaseClient


def request_body(request: AdjustmentRequest) -> dict[str, Any]:
    """Serialize *request* the way the edge function expects it (camelCase keys, unset fields omitted)."""
    body: dict[str, Any] = {
        "type": request.type.value,
        "goalId": request.goal_id,
        "userMessage": request.user_message,
    }
    if request.step_id is not None:
        body["stepId"] = request.step_id
    if request.current_due_date is not None:
        body["currentDueDate"] = request.current_due_date.isoformat()
    if request.requested_extension is not None:
        body["requestedExtension"] = request.requested_extension
    if request.new_frequency is not None:
        body["newFrequency"] = request.new_frequency
    return body


class SupabaseScheduleAdvisor(ScheduleAdvisor):
    def __init__(
        self,
        client: SupabaseClient,
        *,
        function_name: str = "schedule-adjustment",
        timeout_seconds: float = 10.0,
    ) -> None:
        self._client = client
        self._function_name = function_name
        self._timeout = timeout_seconds

    async def advise(self, request: AdjustmentRequest) -> AdvisoryAdvice:
        try:
            payload = await self._client.invoke(self._function_name, request_body(request), timeout=self._timeout)
        except RepositoryError as exc:
            raise AdvisoryUnavailableError(f"{self._function_name} call failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise AdvisoryUnavailableError(f"{self._function_name} returned an unexpected payload")
        if payload.get("success") is False or not payload.get("message"):
            raise AdvisoryUnavailableError(f"{self._function_name} declined the adjustment")
        try:
            return AdvisoryAdvice(message=payload["message"])
        except ValidationError as exc:
            raise AdvisoryUnavailableError(f"{self._function_name} returned malformed advice") from exc
