"""Single exit point for outbound HTTP calls.

Wraps httpx with one timeout/retry policy and scrubs known keys out of any
error text before it reaches logs or callers.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx

from tripboard.security.key_manager import get_key_manager
from tripboard.shared.exceptions import ToolError


class SecureHttpClient:
    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_retries: int = 1,
        tool_name: str = "http",
    ):
        self._timeout = timeout
        self._max_retries = max_retries
        self._tool_name = tool_name
        self._km = get_key_manager()

    def post_json(
        self,
        url: str,
        *,
        payload: dict[str, Any],
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """POST ``payload`` as JSON and return the decoded JSON body."""
        last_error: Optional[Exception] = None

        for attempt in range(1, self._max_retries + 2):
            try:
                resp = httpx.post(
                    url,
                    json=payload,
                    params=params,
                    headers=headers,
                    timeout=self._timeout,
                )
                resp.raise_for_status()
                return resp.json()
            except httpx.HTTPStatusError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"HTTP {e.response.status_code}: {safe_msg}")
            except httpx.TimeoutException:
                last_error = ToolError(self._tool_name, f"timed out after {self._timeout}s (attempt {attempt})")
            except httpx.HTTPError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"request failed: {safe_msg}")
            except ValueError as e:
                safe_msg = self._km.scrub_text(str(e))
                last_error = ToolError(self._tool_name, f"invalid JSON response: {safe_msg}")

            if attempt <= self._max_retries:
                time.sleep(0.5 * attempt)

        raise last_error  # type: ignore[misc]


__all__ = ["SecureHttpClient"]
