"""FastAPI application exposing trip sessions, intents and derived views."""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from typing import Annotated, Any

from dotenv import load_dotenv
from fastapi import Body, FastAPI, HTTPException, Path, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from tripboard.api.schemas import (
    SESSION_ID_PATTERN,
    CreateSessionRequest,
    HealthResponse,
    IntentResponse,
    MapRouteResponse,
    SearchRequest,
    SearchResponse,
    SessionResponse,
    SettlementResponse,
    TimelineResponse,
)
from tripboard.application.discovery import search_places
from tripboard.application.intents import SetSearchResultsIntent, parse_intent
from tripboard.application.reducer import Outcome, OutcomeStatus, apply_intent
from tripboard.application.session import TripSession, new_session
from tripboard.application.views import (
    active_day,
    build_snapshot_view,
    last_added_place,
    session_balances,
    session_paid_totals,
    session_settlements,
)
from tripboard.config.settings import resolve_session_settings
from tripboard.domain.itinerary.store import find_day
from tripboard.domain.itinerary.timeline import day_timeline
from tripboard.infrastructure.session_store import get_session_store
from tripboard.security.redact import redact_sensitive
from tripboard.services.export_formatter import export_markdown
from tripboard.services.map_presenter import present_route
from tripboard.shared.exceptions import ToolError

_api_logger = logging.getLogger("tripboard.api")

load_dotenv()

app = FastAPI(
    title="tripboard",
    version="1.0.0",
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window on mutating requests (single process)."""

    def __init__(self, app, max_requests: int = 120, window_seconds: int = 60):
        super().__init__(app)
        self._max = max_requests
        self._window = window_seconds
        self._counters: dict[str, list[float]] = {}

    async def dispatch(self, request: Request, call_next):
        if request.method not in ("POST", "DELETE"):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        hits = [t for t in self._counters.get(client_ip, []) if now - t < self._window]
        if len(hits) >= self._max:
            return JSONResponse(status_code=429, content={"detail": "Too many requests, slow down"})
        hits.append(now)
        self._counters[client_ip] = hits
        return await call_next(request)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    RateLimitMiddleware,
    max_requests=int(os.getenv("RATE_LIMIT_MAX", "120")),
    window_seconds=int(os.getenv("RATE_LIMIT_WINDOW", "60")),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

store = get_session_store()
_settings = resolve_session_settings()

_locks_guard = threading.Lock()
_session_locks: dict[str, threading.Lock] = {}

_REJECTION_STATUS = {"blocked_deletion": 409}


def _session_lock(session_id: str) -> threading.Lock:
    with _locks_guard:
        lock = _session_locks.get(session_id)
        if lock is None:
            lock = _session_locks[session_id] = threading.Lock()
        return lock


def _load(session_id: str) -> TripSession:
    payload = store.get(session_id)
    if payload is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return TripSession.from_store(payload)


def _save(session: TripSession) -> None:
    store.save(session.session_id, session.to_store())


def _status_code(outcome: Outcome) -> int:
    if outcome.status is OutcomeStatus.CONFIRM:
        return 409
    if outcome.status is OutcomeStatus.REJECTED:
        return _REJECTION_STATUS.get(outcome.code, 422)
    return 200


SessionId = Annotated[str, Path(min_length=1, max_length=64, pattern=SESSION_ID_PATTERN)]


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


@app.get("/diagnostics")
def diagnostics():
    """Tool selection, cache hit rate and session count (add auth before exposing publicly)."""
    from tripboard.adapters.tool_factory import describe_active_tools
    from tripboard.infrastructure.cache import discovery_cache

    return {
        "tools": describe_active_tools(),
        "cache": {"discovery": discovery_cache.stats},
        "sessions": {
            "backend": getattr(store, "backend", "unknown"),
            "active": store.active_count,
        },
    }


@app.post("/sessions", response_model=SessionResponse, status_code=201)
def create_session(req: CreateSessionRequest | None = None):
    participants = req.participants if req and req.participants is not None else _settings.default_participants
    session = new_session(participants=participants)
    _save(session)
    return SessionResponse(**build_snapshot_view(session))


@app.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(session_id: SessionId):
    return SessionResponse(**build_snapshot_view(_load(session_id)))


@app.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: SessionId):
    _load(session_id)
    with _session_lock(session_id):
        store.delete(session_id)
    with _locks_guard:
        _session_locks.pop(session_id, None)


@app.post("/sessions/{session_id}/intents", response_model=IntentResponse)
def post_intent(session_id: SessionId, payload: dict[str, Any] = Body(...)):
    try:
        intent = parse_intent(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=json.loads(exc.json())) from None

    with _session_lock(session_id):
        result = apply_intent(_load(session_id), intent, history_limit=_settings.history_limit)
        if result.outcome.status is OutcomeStatus.APPLIED:
            _save(result.session)

    body = IntentResponse(
        outcome=result.outcome.model_dump(mode="json"),
        session=SessionResponse(**build_snapshot_view(result.session)),
    )
    return JSONResponse(status_code=_status_code(result.outcome), content=body.model_dump(mode="json"))


@app.post("/sessions/{session_id}/search", response_model=SearchResponse)
def search(req: SearchRequest, session_id: SessionId):
    session = _load(session_id)
    anchor = last_added_place(session) if req.nearby else None
    nearby = anchor.name if anchor is not None else None
    try:
        candidates = search_places(req.query, nearby, max_results=req.max_results)
    except ToolError as exc:
        _api_logger.error("search failed: %s", redact_sensitive(str(exc)))
        raise HTTPException(status_code=502, detail="Place search is unavailable") from None

    with _session_lock(session_id):
        result = apply_intent(_load(session_id), SetSearchResultsIntent(candidates=candidates))
        _save(result.session)
    return SearchResponse(
        query=req.query,
        nearby=nearby,
        candidates=[c.model_dump(mode="json") for c in candidates],
    )


@app.get("/sessions/{session_id}/timeline", response_model=TimelineResponse)
def timeline(session_id: SessionId, day_id: str | None = Query(default=None)):
    session = _load(session_id)
    day = find_day(session.itinerary, day_id) if day_id else active_day(session)
    if day is None:
        raise HTTPException(status_code=404, detail=f"Unknown day: {day_id}")
    return TimelineResponse(
        day_id=day.id,
        start_time=day.start_time,
        entries=[entry.model_dump(mode="json") for entry in day_timeline(day)],
    )


@app.get("/sessions/{session_id}/map", response_model=MapRouteResponse)
def map_route(session_id: SessionId):
    return MapRouteResponse(**present_route(active_day(_load(session_id))))


@app.get("/sessions/{session_id}/settlement", response_model=SettlementResponse)
def settlement(session_id: SessionId):
    session = _load(session_id)
    return SettlementResponse(
        balances={name: round(value, 2) for name, value in session_balances(session).items()},
        settlements=[s.model_dump(mode="json", by_alias=True) for s in session_settlements(session)],
        paid_totals=session_paid_totals(session),
    )


@app.get("/sessions/{session_id}/export", response_class=PlainTextResponse)
def export(session_id: SessionId):
    return PlainTextResponse(export_markdown(_load(session_id)), media_type="text/markdown")
