"""Helpers for redacting sensitive values in logs and error strings."""

from __future__ import annotations

import re

_REDACTED = "***REDACTED***"

_QUERY_VALUE_RE = re.compile(
    r"(?i)(?P<prefix>\b(?:key|api[_-]?key|token|secret|password)\s*=\s*)(?P<value>[^&\s\"']+)"
)
_JSON_KV_RE = re.compile(
    r"(?i)(?P<prefix>(?:[\"']?(?:api[_-]?key|x-goog-api-key|token|secret|password)[\"']?\s*[:=]\s*[\"']?))(?P<value>[^\"',\s}]+)"
)
_GOOG_HEADER_RE = re.compile(r"(?i)(?P<prefix>\bx-goog-api-key\s*:\s*)(?P<value>[^\s,;]+)")
_BEARER_RE = re.compile(r"(?i)(?P<prefix>\bbearer\s+)(?P<value>[A-Za-z0-9._~+/=-]+)")
_GOOGLE_KEY_RE = re.compile(r"\bAIza[0-9A-Za-z_-]{20,}\b")
_REDIS_DSN_RE = re.compile(r"(?i)(?P<prefix>\brediss?://)(?P<creds>[^@/\s]+)@")


def _replace_value(pattern: re.Pattern[str], text: str) -> str:
    return pattern.sub(lambda match: f"{match.group('prefix')}{_REDACTED}", text)


def redact_sensitive(text: str) -> str:
    """Mask API keys, bearer tokens and DSN credentials, keeping the context around them."""
    if not text:
        return text

    redacted = str(text)
    for pattern in (_QUERY_VALUE_RE, _JSON_KV_RE, _GOOG_HEADER_RE, _BEARER_RE):
        redacted = _replace_value(pattern, redacted)
    redacted = _GOOGLE_KEY_RE.sub(_REDACTED, redacted)
    return _REDIS_DSN_RE.sub(rf"\g<prefix>{_REDACTED}@", redacted)


__all__ = ["redact_sensitive"]
