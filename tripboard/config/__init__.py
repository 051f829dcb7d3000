"""Runtime configuration helpers."""

from tripboard.config.settings import (
    ProviderSnapshot,
    SessionSettings,
    resolve_provider_snapshot,
    resolve_session_settings,
)

__all__ = [
    "ProviderSnapshot",
    "SessionSettings",
    "resolve_provider_snapshot",
    "resolve_session_settings",
]
