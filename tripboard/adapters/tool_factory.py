"""Concrete discovery tool selection."""

from __future__ import annotations

import logging

from tripboard.adapters.discovery import mock as mock_discovery
from tripboard.config.settings import resolve_provider_snapshot
from tripboard.security.key_manager import GEMINI_KEY, get_key_manager
from tripboard.security.redact import redact_sensitive
from tripboard.shared.exceptions import ToolError

_logger = logging.getLogger("tripboard.tools")


def get_discovery_tool():
    snapshot = resolve_provider_snapshot()
    if snapshot.discovery_provider == "mock":
        return mock_discovery

    if not get_key_manager().has_key(GEMINI_KEY):
        if snapshot.strict_external_data:
            raise ToolError("discovery", "STRICT_EXTERNAL_DATA=true requires GEMINI_API_KEY")
        _logger.warning("DISCOVERY_PROVIDER=gemini without GEMINI_API_KEY; using sample places")
        return mock_discovery

    try:
        from tripboard.adapters.discovery import real as real_discovery

        return real_discovery
    except ImportError as exc:
        if snapshot.strict_external_data:
            raise ToolError("discovery", f"Failed to load gemini adapter: {redact_sensitive(str(exc))}") from None
        _logger.warning("Failed to load gemini adapter, fallback to mock: %s", redact_sensitive(str(exc)))
    return mock_discovery


def describe_active_tools() -> dict[str, str]:
    tool = get_discovery_tool()
    return {"discovery": tool.__name__.rsplit(".", 1)[-1]}


__all__ = ["describe_active_tools", "get_discovery_tool"]
