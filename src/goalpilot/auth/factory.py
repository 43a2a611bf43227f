"""Token resolver factory."""

from __future__ import annotations

from goalpilot.auth.resolvers import EnvTokenResolver, StaticTokenResolver, TokenResolver
from goalpilot.contracts.config import GoalPilotConfig
from goalpilot.contracts.exceptions import ConfigError

AUTH_MODES = ("env", "token")


def create_token_resolver(config: GoalPilotConfig) -> TokenResolver:
    """Pick the key source named by ``config.auth``."""
    if config.auth == "env":
        return EnvTokenResolver()
    if config.auth == "token":
        return StaticTokenResolver(config.token or "")
    raise ConfigError(f"Unknown auth mode: {config.auth} (expected one of {', '.join(AUTH_MODES)})")
