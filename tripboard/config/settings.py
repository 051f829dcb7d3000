"""Runtime configuration resolved from the environment."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from tripboard.domain.constants import DEFAULT_PARTICIPANTS

_TRUTHY = {"1", "true", "yes", "on"}
_DISCOVERY_MODES = {"auto", "mock", "gemini"}
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


def _is_enabled(value: str | None) -> bool:
    return bool(value and value.strip().lower() in _TRUTHY)


def _is_configured(value: str | None) -> bool:
    return bool(value and value.strip())


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


def strict_external_data_enabled() -> bool:
    return _is_enabled(os.getenv("STRICT_EXTERNAL_DATA"))


def resolve_discovery_provider() -> str:
    mode = str(os.getenv("DISCOVERY_PROVIDER") or "").strip().lower()
    if mode not in _DISCOVERY_MODES:
        mode = "auto"
    if mode == "auto":
        return "gemini" if _is_configured(os.getenv("GEMINI_API_KEY")) else "mock"
    return mode


def resolve_default_participants() -> tuple[str, ...]:
    raw = os.getenv("TRIPBOARD_DEFAULT_PARTICIPANTS")
    if raw is None:
        return DEFAULT_PARTICIPANTS
    return tuple(name.strip() for name in raw.split(",") if name.strip())


class ProviderSnapshot(BaseModel):
    discovery_provider: str = Field(default="mock")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL)
    strict_external_data: bool = Field(default=False)


class SessionSettings(BaseModel):
    ttl_seconds: float = Field(default=1800.0, gt=0)
    max_sessions: int = Field(default=1000, ge=1)
    redis_url: str | None = None
    history_limit: int = Field(default=50, ge=0)
    default_participants: tuple[str, ...] = DEFAULT_PARTICIPANTS


def resolve_provider_snapshot() -> ProviderSnapshot:
    return ProviderSnapshot(
        discovery_provider=resolve_discovery_provider(),
        gemini_model=str(os.getenv("GEMINI_MODEL") or "").strip() or DEFAULT_GEMINI_MODEL,
        strict_external_data=strict_external_data_enabled(),
    )


def resolve_session_settings() -> SessionSettings:
    try:
        ttl = float(os.getenv("SESSION_TTL_SECONDS", "1800"))
    except ValueError:
        ttl = 1800.0
    return SessionSettings(
        ttl_seconds=ttl if ttl > 0 else 1800.0,
        max_sessions=max(1, _int_env("SESSION_MAX_SESSIONS", 1000)),
        redis_url=str(os.getenv("REDIS_URL") or "").strip() or None,
        history_limit=max(0, _int_env("HISTORY_LIMIT", 50)),
        default_participants=resolve_default_participants(),
    )


__all__ = [
    "ProviderSnapshot",
    "SessionSettings",
    "resolve_discovery_provider",
    "resolve_provider_snapshot",
    "resolve_session_settings",
    "strict_external_data_enabled",
]
