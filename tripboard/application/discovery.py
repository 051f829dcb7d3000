"""Place search with caching and an offline fallback."""

from __future__ import annotations

from typing import Optional

from tripboard.adapters.discovery import mock as mock_discovery
from tripboard.adapters.discovery.interfaces import DiscoveryQuery
from tripboard.adapters.tool_factory import get_discovery_tool
from tripboard.config.settings import strict_external_data_enabled
from tripboard.domain.models import PlaceCandidate
from tripboard.infrastructure.cache import MemoryCache, discovery_cache, make_cache_key
from tripboard.infrastructure.logging import StructuredLogger, get_logger
from tripboard.shared.exceptions import ToolError

OFFLINE_SUFFIX = " (offline)"


def offline_candidates(max_results: int = 5) -> list[PlaceCandidate]:
    return [
        candidate.model_copy(update={"name": f"{candidate.name}{OFFLINE_SUFFIX}"})
        for candidate in mock_discovery.sample_candidates()[:max_results]
    ]


def search_places(
    query: str,
    nearby: Optional[str] = None,
    *,
    max_results: int = 5,
    cache: MemoryCache | None = None,
    logger: StructuredLogger | None = None,
) -> list[PlaceCandidate]:
    """Ask the discovery tool for candidates near ``nearby`` or matching ``query``.

    Tool failures degrade to the sample list marked as offline, unless
    STRICT_EXTERNAL_DATA is set, in which case the ToolError propagates.
    """
    params = DiscoveryQuery(query=query, nearby=nearby, max_results=max_results)
    store = cache if cache is not None else discovery_cache
    key = make_cache_key("discovery", params.query, params.nearby, params.max_results)
    cached = store.get(key)
    if cached is not None:
        return list(cached)

    log = logger or get_logger()
    tool = get_discovery_tool()
    log.tool_call("discovery", provider=tool.__name__.rsplit(".", 1)[-1], query=params.query, nearby=params.nearby)
    try:
        results = tool.search_places(params)
    except ToolError as exc:
        if strict_external_data_enabled():
            raise
        log.warning("discovery", f"search failed, serving offline samples: {exc}")
        return offline_candidates(params.max_results)

    store.set(key, tuple(results))
    return results


__all__ = ["OFFLINE_SUFFIX", "offline_candidates", "search_places"]
