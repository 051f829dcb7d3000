"""Structured logging: one JSON object per line, secrets scrubbed."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


def _get_scrubber():
    """Imported lazily to avoid a cycle with the security package."""
    try:
        from tripboard.security.key_manager import get_key_manager
        return get_key_manager()
    except ImportError:
        return None


class StructuredLogger:
    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr

    def _scrub(self, text: str) -> str:
        km = _get_scrubber()
        if km:
            return km.scrub_text(text)
        return text

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            line = self._scrub(line)
            self._output.write(line + "\n")
            self._output.flush()
        except (OSError, TypeError, ValueError) as exc:
            fallback = {
                "event": "logger_internal_error",
                "trace_id": self.trace_id,
                "timestamp": time.time(),
                "error": str(exc),
            }
            sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
            sys.stderr.flush()

    def intent(self, intent_type: str, status: str, *, code: str = "", session_id: str = "", **extra: Any) -> None:
        self._emit({
            "event": f"intent_{status}",
            "intent": intent_type,
            "code": code,
            "session_id": session_id,
            **extra,
        })

    def tool_call(self, tool_name: str, **extra: Any) -> None:
        self._emit({"event": "tool_call", "tool": tool_name, **extra})

    def error(self, area: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "area": area, "error": self._scrub(error), **extra})

    def warning(self, area: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "area": area, "message": self._scrub(message), **extra})


_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


__all__ = ["StructuredLogger", "get_logger"]
