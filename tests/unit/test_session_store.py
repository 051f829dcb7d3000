import time

from tripboard.config.settings import SessionSettings, resolve_session_settings
from tripboard.infrastructure.session_store import SessionStore, build_store


def test_save_get_delete():
    store = SessionStore()
    store.save("a", {"session_id": "a"})
    assert store.get("a") == {"session_id": "a"}
    assert store.exists("a")
    store.delete("a")
    assert store.get("a") is None


def test_expired_sessions_disappear(monkeypatch):
    store = SessionStore(ttl=10)
    store.save("a", {"x": 1})
    now = time.time()
    monkeypatch.setattr(time, "time", lambda: now + 11)
    assert store.get("a") is None
    assert store.active_count == 0


def test_capacity_evicts_oldest():
    store = SessionStore(max_sessions=2)
    store.save("a", {})
    store.save("b", {})
    store.save("c", {})
    assert store.get("a") is None
    assert store.exists("b") and store.exists("c")


def test_memory_backend_without_redis_url():
    assert build_store(SessionSettings()).backend == "memory"


def test_unreachable_redis_falls_back_to_memory():
    store = build_store(SessionSettings(redis_url="redis://127.0.0.1:1/0"))
    assert store.backend == "memory"


def test_session_settings_from_env(monkeypatch):
    monkeypatch.setenv("SESSION_TTL_SECONDS", "-4")
    monkeypatch.setenv("HISTORY_LIMIT", "7")
    monkeypatch.setenv("TRIPBOARD_DEFAULT_PARTICIPANTS", "Ann, Ben,,")
    settings = resolve_session_settings()
    assert settings.ttl_seconds == 1800.0
    assert settings.history_limit == 7
    assert settings.default_participants == ("Ann", "Ben")
