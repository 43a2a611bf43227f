"""Schedule advisor contract.

The advisor is an optional oracle that can phrase a schedule adjustment more
personally.  It never decides *whether* an adjustment happens; callers fall
back to static messages when it raises
:class:`~goalpilot.contracts.exceptions.AdvisoryUnavailableError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from goalpilot.contracts.schedule import AdjustmentRequest, AdvisoryAdvice


class ScheduleAdvisor(ABC):
    @abstractmethod
    async def advise(self, request: AdjustmentRequest) -> AdvisoryAdvice: ...  # pragma: no cover
