"""Infrastructure services and cross-cutting utilities."""

from tripboard.infrastructure.cache import MemoryCache, discovery_cache, make_cache_key
from tripboard.infrastructure.logging import StructuredLogger, get_logger
from tripboard.infrastructure.session_store import get_session_store

__all__ = [
    "MemoryCache",
    "StructuredLogger",
    "discovery_cache",
    "get_logger",
    "get_session_store",
    "make_cache_key",
]
