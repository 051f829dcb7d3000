"""Mock discovery adapter serving the bundled sample places."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from tripboard.adapters.discovery.interfaces import DiscoveryQuery
from tripboard.domain.models import PlaceCandidate
from tripboard.shared.exceptions import ToolError

DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "sample_places.json"
_cache: Optional[list[dict]] = None


def _load_data() -> list[dict]:
    global _cache
    if _cache is not None:
        return _cache
    if not DATA_FILE.exists():
        raise ToolError("mock_discovery", f"Data file not found: {DATA_FILE}")
    with open(DATA_FILE, encoding="utf-8") as f:
        _cache = json.load(f)
    return _cache


def sample_candidates() -> list[PlaceCandidate]:
    return [PlaceCandidate(**raw) for raw in _load_data()]


def search_places(params: DiscoveryQuery) -> list[PlaceCandidate]:
    """The sample list does not depend on the query."""
    return sample_candidates()[: params.max_results]
