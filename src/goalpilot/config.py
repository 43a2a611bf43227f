"""Config loading and backend-specific validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import ValidationError

from goalpilot.contracts.config import GoalPilotConfig
from goalpilot.contracts.exceptions import ConfigError


def _resolve_path(value: Path | None, *, base_dir: Path) -> Path | None:
    if value is None:
        return None
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def _validate_backend_specific_config(config: GoalPilotConfig) -> None:
    if config.backend != "supabase":
        return
    parsed = urlparse(config.supabase_url or "")
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"supabase_url must be an http(s) URL: {config.supabase_url}")


def load_config(path: str | Path) -> GoalPilotConfig:
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = GoalPilotConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    resolved_config = parsed.model_copy(
        update={"store_path": _resolve_path(parsed.store_path, base_dir=config_dir)}
    )
    _validate_backend_specific_config(resolved_config)
    return resolved_config
