"""Trip session store with in-memory default and optional Redis backend.

Sessions are kept as JSON-ready dicts so both backends share one contract.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Optional

try:
    import redis
except ImportError:  # pragma: no cover - optional dependency
    redis = None

from tripboard.config.settings import SessionSettings, resolve_session_settings

_logger = logging.getLogger("tripboard.session")

_DEFAULT_PREFIX = "tripboard:session:"


class SessionStore:
    """Thread-safe in-memory session store."""

    backend = "memory"

    def __init__(self, ttl: float = 1800.0, max_sessions: int = 1000):
        self._store: dict[str, tuple[dict[str, Any], float]] = {}
        self._ttl = ttl
        self._max_sessions = max_sessions
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return None
            data, expire_at = entry
            if time.time() > expire_at:
                del self._store[session_id]
                return None
            return data

    def save(self, session_id: str, state: dict[str, Any]) -> None:
        with self._lock:
            if session_id not in self._store and len(self._store) >= self._max_sessions:
                self._cleanup_expired()
                if len(self._store) >= self._max_sessions:
                    oldest = min(self._store, key=lambda k: self._store[k][1])
                    del self._store[oldest]
            self._store[session_id] = (state, time.time() + self._ttl)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._store.pop(session_id, None)

    def exists(self, session_id: str) -> bool:
        return self.get(session_id) is not None

    def _cleanup_expired(self) -> None:
        now = time.time()
        for key in [k for k, (_, exp) in self._store.items() if now > exp]:
            del self._store[key]

    @property
    def active_count(self) -> int:
        now = time.time()
        with self._lock:
            return sum(1 for _, exp in self._store.values() if now <= exp)


class RedisSessionStore:
    """Redis-backed session store for multi-instance deployments."""

    backend = "redis"

    def __init__(self, redis_url: str, ttl: float = 1800.0, prefix: str = _DEFAULT_PREFIX):
        if redis is None:  # pragma: no cover
            raise RuntimeError("redis package is not installed")
        self._ttl = max(1, int(ttl))
        self._prefix = prefix
        self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        self._client.ping()

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    def get(self, session_id: str) -> Optional[dict[str, Any]]:
        raw = self._client.get(self._key(session_id))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            self._client.delete(self._key(session_id))
            return None

    def save(self, session_id: str, state: dict[str, Any]) -> None:
        payload = json.dumps(state, ensure_ascii=False, default=str)
        self._client.setex(self._key(session_id), self._ttl, payload)

    def delete(self, session_id: str) -> None:
        self._client.delete(self._key(session_id))

    def exists(self, session_id: str) -> bool:
        return bool(self._client.exists(self._key(session_id)))

    @property
    def active_count(self) -> int:
        return sum(1 for _ in self._client.scan_iter(match=f"{self._prefix}*"))


def build_store(settings: SessionSettings | None = None):
    cfg = settings or resolve_session_settings()
    if cfg.redis_url:
        if redis is None:
            _logger.warning("REDIS_URL is set but redis dependency is missing; fallback to memory store")
        else:
            try:
                store = RedisSessionStore(redis_url=cfg.redis_url, ttl=cfg.ttl_seconds)
                _logger.info("Session store initialized with Redis backend")
                return store
            except redis.RedisError as exc:
                _logger.warning("Failed to initialize Redis session store, fallback to memory store: %s", exc)
    return SessionStore(ttl=cfg.ttl_seconds, max_sessions=cfg.max_sessions)


_global_lock = threading.Lock()
_global_store = None


def get_session_store():
    global _global_store
    with _global_lock:
        if _global_store is None:
            _global_store = build_store()
        return _global_store


__all__ = [
    "RedisSessionStore",
    "SessionStore",
    "build_store",
    "get_session_store",
]
