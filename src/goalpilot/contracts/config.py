"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class ExtensionPolicy(BaseModel):
    """Effort-based default extension lengths.

    Steps up to ``quick_max_minutes`` get ``quick_days``, up to
    ``medium_max_minutes`` get ``medium_days``, anything longer ``long_days``.
    """

    quick_max_minutes: int = Field(default=30, ge=1)
    quick_days: int = Field(default=2, ge=0)
    medium_max_minutes: int = Field(default=120, ge=1)
    medium_days: int = Field(default=3, ge=0)
    long_days: int = Field(default=5, ge=0)
    default_effort_minutes: int = Field(default=30, ge=1)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_thresholds(self) -> ExtensionPolicy:
        if self.medium_max_minutes < self.quick_max_minutes:
            raise ValueError("medium_max_minutes must not be lower than quick_max_minutes")
        return self


class AdvisorConfig(BaseModel):
    enabled: bool = False
    function_name: str = "schedule-adjustment"
    timeout_seconds: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


class GoalPilotConfig(BaseModel):
    backend: str = "memory"
    store_path: Path | None = None
    supabase_url: str | None = None
    auth: str = "env"
    token: str | None = None
    user_id: str
    milestone_group_size: int = Field(default=3, ge=1)
    upcoming_days_ahead: int = Field(default=3, ge=0)
    recent_check_in_days: int = Field(default=2, ge=0)
    extension_policy: ExtensionPolicy = Field(default_factory=ExtensionPolicy)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)
    max_retries: int = Field(default=3, ge=0, le=10)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_backend(self) -> GoalPilotConfig:
        if self.backend not in {"memory", "supabase"}:
            raise ValueError("backend must be one of: memory, supabase")
        if self.backend == "supabase" and not (self.supabase_url or "").strip():
            raise ValueError("supabase backend requires supabase_url")
        if self.advisor.enabled and self.backend != "supabase":
            raise ValueError("advisor requires the supabase backend")
        return self

    @model_validator(mode="after")
    def validate_auth_token(self) -> GoalPilotConfig:
        token = (self.token or "").strip()
        if self.auth not in {"env", "token"}:
            raise ValueError("auth must be one of: env, token")
        if self.auth == "token" and not token:
            raise ValueError("token auth requires a non-empty token")
        if self.auth != "token" and token:
            raise ValueError("token must be unset when auth is not 'token'")
        return self
