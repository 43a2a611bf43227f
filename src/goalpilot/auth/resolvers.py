"""Supabase API key resolvers.

The key is sent both as the ``apikey`` header and as the bearer token, so a
resolver only has to produce one non-blank string.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

from goalpilot.contracts.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SUPABASE_KEY_ENV = "SUPABASE_KEY"


class TokenResolver(ABC):
    """Produces the Supabase key from one configured source."""

    #: Human-readable name of the key source, used in errors.
    source: str = "resolver"

    @abstractmethod
    async def _read_key(self) -> str | None:
        """Return the raw key, or ``None`` when the source has none."""

    async def resolve(self) -> str:
        key = (await self._read_key() or "").strip()
        if not key:
            raise AuthenticationError(f"No Supabase key found in {self.source}")
        logger.debug("Resolved Supabase key from %s", self.source)
        return key


class EnvTokenResolver(TokenResolver):
    def __init__(self, variable: str = SUPABASE_KEY_ENV) -> None:
        self.variable = variable
        self.source = f"environment variable {variable}"

    async def _read_key(self) -> str | None:
        return os.getenv(self.variable)


class StaticTokenResolver(TokenResolver):
    source = "config field 'token'"

    def __init__(self, token: str) -> None:
        self.token = token

    async def _read_key(self) -> str | None:
        return self.token
