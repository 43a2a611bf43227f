"""Auth module public exports."""

from goalpilot.auth.factory import create_token_resolver
from goalpilot.auth.resolvers import EnvTokenResolver, StaticTokenResolver, TokenResolver

__all__ = ["EnvTokenResolver", "StaticTokenResolver", "TokenResolver", "create_token_resolver"]
