"""Backend selection.

Decouples backend choice from the scheduling core: callers ask for a
:class:`Backend` built from config and get repository implementations plus the
optional advisor, without importing concrete adapters.
"""

from __future__ import annotations

import logging
from pathlib import Path

from goalpilot.auth import create_token_resolver
from goalpilot.contracts.advisor import ScheduleAdvisor
from goalpilot.contracts.config import GoalPilotConfig
from goalpilot.contracts.exceptions import ConfigError
from goalpilot.repositories.memory import InMemoryStore, load_store, save_store
from goalpilot.repositories.supabase import SupabaseClient, SupabaseRepository, SupabaseScheduleAdvisor

_LOG = logging.getLogger(__name__)


class Backend:
    """Repositories and advisor for one configured backend.

    ``store`` implements every repository contract.  Call :meth:`aclose` when
    done; it persists the memory snapshot when one is configured and closes
    any network client.
    """

    def __init__(
        self,
        store: InMemoryStore | SupabaseRepository,
        *,
        advisor: ScheduleAdvisor | None = None,
        client: SupabaseClient | None = None,
        store_path: Path | None = None,
    ) -> None:
        self.store = store
        self.advisor = advisor
        self._client = client
        self._store_path = store_path

    def persist(self) -> None:
        if isinstance(self.store, InMemoryStore) and self._store_path is not None:
            save_store(self.store, self._store_path)
            _LOG.debug("Persisted store snapshot to %s", self._store_path)

    async def aclose(self) -> None:
        try:
            self.persist()
        finally:
            if self._client is not None:
                await self._client.aclose()
                self._client = None


async def create_backend(config: GoalPilotConfig) -> Backend:
    if config.backend == "memory":
        store = load_store(config.store_path) if config.store_path is not None else InMemoryStore()
        return Backend(store, store_path=config.store_path)

    if config.backend == "supabase":
        api_key = await create_token_resolver(config).resolve()
        client = SupabaseClient(config.supabase_url or "", api_key, max_retries=config.max_retries)
        advisor = None
        if config.advisor.enabled:
            advisor = SupabaseScheduleAdvisor(
                client,
                function_name=config.advisor.function_name,
                timeout_seconds=config.advisor.timeout_seconds,
            )
        return Backend(SupabaseRepository(client), advisor=advisor, client=client)

    raise ConfigError(f"Unknown backend: {config.backend}")
