"""Central access to API keys.

External adapters read keys through here rather than ``os.getenv`` so that
every known key value can be scrubbed from logs and error messages.
"""

from __future__ import annotations

import os
from typing import Optional

from tripboard.security.redact import redact_sensitive
from tripboard.shared.exceptions import KeyMissingError

GEMINI_KEY = "GEMINI_API_KEY"


class KeyManager:
    def __init__(self):
        self._keys: dict[str, str] = {}

    def get(self, name: str, *, required: bool = False) -> Optional[str]:
        value = self._keys.get(name)
        if value is None:
            value = os.getenv(name, "")
            if value:
                self._keys[name] = value
            elif required:
                raise KeyMissingError(name)
            else:
                return None
        return value

    def get_gemini_key(self, *, required: bool = True) -> str:
        return self.get(GEMINI_KEY, required=required) or ""

    def has_key(self, name: str) -> bool:
        if name in self._keys:
            return True
        return bool(os.getenv(name, ""))

    def reload(self, name: str) -> None:
        """Re-read ``name`` from the environment (key rotation, tests)."""
        raw = os.getenv(name, "")
        if raw:
            self._keys[name] = raw
        else:
            self._keys.pop(name, None)

    def scrub_text(self, text: str) -> str:
        result = str(text) if text is not None else ""
        for name, value in self._keys.items():
            if value and value in result:
                result = result.replace(value, f"[{name}:***REDACTED***]")
        return redact_sensitive(result)


_manager: Optional[KeyManager] = None


def get_key_manager() -> KeyManager:
    global _manager
    if _manager is None:
        _manager = KeyManager()
    return _manager


__all__ = ["GEMINI_KEY", "KeyManager", "get_key_manager"]
