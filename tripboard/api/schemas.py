"""API request/response models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

SESSION_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


class CreateSessionRequest(BaseModel):
    participants: Optional[list[str]] = Field(
        default=None,
        max_length=50,
        description="Initial roster; the configured default roster when omitted",
    )


class SearchRequest(BaseModel):
    query: str = Field(default="", max_length=200, description="Free-text place query")
    nearby: bool = Field(default=False, description="Search around the most recently added place")
    max_results: int = Field(default=5, ge=1, le=20)


class OutcomeResponse(BaseModel):
    status: str
    code: str = ""
    message: str = ""
    count: Optional[int] = None


class SessionResponse(BaseModel):
    session_id: str
    itinerary: dict[str, Any] = Field(default_factory=dict)
    active_day_id: str = ""
    timeline: list[dict[str, Any]] = Field(default_factory=list)
    ledger: dict[str, Any] = Field(default_factory=dict)
    balances: dict[str, float] = Field(default_factory=dict)
    settlements: list[dict[str, Any]] = Field(default_factory=list)
    paid_totals: dict[str, float] = Field(default_factory=dict)
    search_results: list[dict[str, Any]] = Field(default_factory=list)
    nearby_context: Optional[str] = None
    can_undo: bool = False
    can_redo: bool = False


class IntentResponse(BaseModel):
    outcome: OutcomeResponse
    session: SessionResponse


class SearchResponse(BaseModel):
    query: str
    nearby: Optional[str] = None
    candidates: list[dict[str, Any]] = Field(default_factory=list)


class TimelineResponse(BaseModel):
    day_id: str
    start_time: str
    entries: list[dict[str, Any]] = Field(default_factory=list)


class MapRouteResponse(BaseModel):
    day_id: str
    title: str
    markers: list[dict[str, Any]] = Field(default_factory=list)
    path: list[list[float]] = Field(default_factory=list)


class SettlementResponse(BaseModel):
    balances: dict[str, float] = Field(default_factory=dict)
    settlements: list[dict[str, Any]] = Field(default_factory=list)
    paid_totals: dict[str, float] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str = "ok"
