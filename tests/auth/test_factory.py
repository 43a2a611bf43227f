import pytest

from goalpilot.auth.factory import create_token_resolver
from goalpilot.auth.resolvers import EnvTokenResolver, StaticTokenResolver
from goalpilot.contracts.config import GoalPilotConfig
from goalpilot.contracts.exceptions import AuthenticationError, ConfigError


def _make_config(*, auth: str, token: str | None = None) -> GoalPilotConfig:
    return GoalPilotConfig(
        backend="supabase",
        supabase_url="https://project.supabase.co",
        auth=auth,
        token=token,
        user_id="u1",
    )


def test_factory_creates_env_resolver() -> None:
    resolver = create_token_resolver(_make_config(auth="env"))

    assert isinstance(resolver, EnvTokenResolver)


def test_factory_creates_static_resolver() -> None:
    resolver = create_token_resolver(_make_config(auth="token", token="service_key"))

    assert isinstance(resolver, StaticTokenResolver)
    assert resolver.token == "service_key"


def test_factory_raises_for_unknown_auth_mode() -> None:
    config = GoalPilotConfig.model_construct(
        backend="supabase",
        supabase_url="https://project.supabase.co",
        auth="unsupported",
        token=None,
        user_id="u1",
    )

    with pytest.raises(ConfigError, match="Unknown auth mode"):
        create_token_resolver(config)


@pytest.mark.asyncio
async def test_env_resolver_reads_and_strips(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_KEY", "  anon_key \n")

    assert await EnvTokenResolver().resolve() == "anon_key"


@pytest.mark.asyncio
async def test_env_resolver_custom_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOALPILOT_KEY", "custom")

    assert await EnvTokenResolver("GOALPILOT_KEY").resolve() == "custom"


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, "", "   "])
async def test_env_resolver_rejects_missing_key(monkeypatch: pytest.MonkeyPatch, value: str | None) -> None:
    if value is None:
        monkeypatch.delenv("SUPABASE_KEY", raising=False)
    else:
        monkeypatch.setenv("SUPABASE_KEY", value)

    with pytest.raises(AuthenticationError, match="SUPABASE_KEY"):
        await EnvTokenResolver().resolve()


@pytest.mark.asyncio
async def test_static_resolver_rejects_blank_token() -> None:
    with pytest.raises(AuthenticationError, match="config field 'token'"):
        await StaticTokenResolver(token="  ").resolve()


@pytest.mark.asyncio
async def test_static_resolver_strips_token() -> None:
    assert await StaticTokenResolver(" service_key ").resolve() == "service_key"


def test_resolvers_name_their_source() -> None:
    assert EnvTokenResolver("GOALPILOT_KEY").source == "environment variable GOALPILOT_KEY"
    assert StaticTokenResolver("k").source == "config field 'token'"
