"""Place-discovery tool contract."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from tripboard.domain.models import PlaceCandidate


class DiscoveryQuery(BaseModel):
    query: str = Field(default="", max_length=200)
    nearby: Optional[str] = Field(default=None, max_length=200)
    max_results: int = Field(default=5, ge=1, le=20)


@runtime_checkable
class DiscoveryTool(Protocol):
    def search_places(self, params: DiscoveryQuery) -> list[PlaceCandidate]: ...


__all__ = ["DiscoveryQuery", "DiscoveryTool"]
