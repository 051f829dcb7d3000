"""pytest global fixtures: keep tests away from real external services."""

import pytest


@pytest.fixture(autouse=True)
def no_real_apis(monkeypatch):
    """Strip Gemini/Redis settings so discovery always uses the bundled samples."""
    for name in (
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "DISCOVERY_PROVIDER",
        "STRICT_EXTERNAL_DATA",
        "REDIS_URL",
        "TRIPBOARD_DEFAULT_PARTICIPANTS",
    ):
        monkeypatch.delenv(name, raising=False)

    from tripboard.infrastructure.cache import discovery_cache
    from tripboard.security.key_manager import get_key_manager

    get_key_manager().reload("GEMINI_API_KEY")
    discovery_cache.clear()
    yield
    discovery_cache.clear()
    get_key_manager().reload("GEMINI_API_KEY")
