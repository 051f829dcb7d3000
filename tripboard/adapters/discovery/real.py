"""Gemini-backed place discovery.

Environment: GEMINI_API_KEY, optional GEMINI_MODEL.
API reference: https://ai.google.dev/api/generate-content
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from tripboard.adapters.discovery.interfaces import DiscoveryQuery
from tripboard.config.settings import resolve_provider_snapshot
from tripboard.domain.models import PlaceCandidate
from tripboard.security.http_client import SecureHttpClient
from tripboard.security.key_manager import get_key_manager
from tripboard.shared.exceptions import ToolError

_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "places": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "lat": {"type": "NUMBER"},
                    "lng": {"type": "NUMBER"},
                    "estimatedTime": {"type": "STRING", "description": "Suggested visit duration"},
                },
                "required": ["name", "description", "lat", "lng"],
            },
        }
    },
    "required": ["places"],
}

_http = SecureHttpClient(tool_name="gemini_discovery", timeout=20.0, max_retries=1)


def _get_api_key() -> str:
    key = get_key_manager().get_gemini_key(required=False)
    if not key:
        raise ToolError("gemini_discovery", "GEMINI_API_KEY is not set")
    return key


def build_prompt(params: DiscoveryQuery) -> str:
    count = params.max_results
    if params.nearby:
        return (
            f'List {count} popular sights near "{params.nearby}", or places related to '
            f'"{params.query}". Give real latitude (lat) and longitude (lng).'
        )
    return f'List {count} popular sights related to "{params.query}". Give real latitude (lat) and longitude (lng).'


def _extract_text(body: dict[str, Any]) -> str:
    candidates = body.get("candidates") or []
    if not candidates:
        raise ToolError("gemini_discovery", "response has no candidates")
    parts = (candidates[0].get("content") or {}).get("parts") or []
    text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
    return text or "{}"


def parse_places(body: dict[str, Any]) -> list[PlaceCandidate]:
    try:
        raw = json.loads(_extract_text(body))
    except json.JSONDecodeError as exc:
        raise ToolError("gemini_discovery", f"malformed JSON payload: {exc}") from None

    results: list[PlaceCandidate] = []
    for item in raw.get("places", []) if isinstance(raw, dict) else []:
        if not isinstance(item, dict):
            continue
        try:
            results.append(
                PlaceCandidate(
                    name=item["name"],
                    description=item.get("description", ""),
                    lat=item["lat"],
                    lng=item["lng"],
                    estimated_time=item.get("estimatedTime"),
                )
            )
        except (KeyError, ValidationError):
            continue
    return results


def search_places(params: DiscoveryQuery) -> list[PlaceCandidate]:
    model = resolve_provider_snapshot().gemini_model
    body = _http.post_json(
        _BASE_URL.format(model=model),
        payload={
            "contents": [{"parts": [{"text": build_prompt(params)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": _RESPONSE_SCHEMA,
            },
        },
        headers={"x-goog-api-key": _get_api_key()},
    )
    return parse_places(body)[: params.max_results]
