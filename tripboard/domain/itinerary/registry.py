"""Place identity: id generation, duplicate detection and cloning."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from typing import Union

from tripboard.domain.constants import DEFAULT_STAY_MINUTES, DEFAULT_TRANSPORT, DEFAULT_TRAVEL_MINUTES
from tripboard.domain.models import Coordinates, ItineraryState, Place, PlaceCandidate

PlaceSource = Union[Place, PlaceCandidate]


def new_place_id() -> str:
    return f"place-{uuid.uuid4().hex[:12]}"


def new_day_id() -> str:
    return f"day-{uuid.uuid4().hex[:8]}"


def iter_places(state: ItineraryState) -> Iterator[Place]:
    yield from state.pool
    for day in state.days:
        yield from day.places


def place_ids(state: ItineraryState) -> list[str]:
    return [place.id for place in iter_places(state)]


def contains_place(state: ItineraryState, place_id: str) -> bool:
    return any(place.id == place_id for place in iter_places(state))


def is_duplicate(state: ItineraryState, source: PlaceSource) -> bool:
    """Candidates carry no identity yet, so only an existing Place can collide."""
    return isinstance(source, Place) and contains_place(state, source.id)


def clone_place(source: PlaceSource) -> Place:
    """Fresh instance with a new id; scheduling fields are copied, never invented."""
    if isinstance(source, Place):
        return source.model_copy(update={"id": new_place_id()})
    return Place(
        id=new_place_id(),
        name=source.name,
        description=source.description,
        coordinates=Coordinates(lat=source.lat, lng=source.lng),
        estimated_time=source.estimated_time,
    )


def promote_to_scheduled(place: Place) -> Place:
    """Fill the scheduling defaults a place needs once it sits in a day."""
    updates: dict[str, object] = {}
    if place.stay_minutes is None:
        updates["stay_minutes"] = DEFAULT_STAY_MINUTES
    if place.travel_minutes_to_next is None:
        updates["travel_minutes_to_next"] = DEFAULT_TRAVEL_MINUTES
    if place.transport_to_next is None:
        updates["transport_to_next"] = DEFAULT_TRANSPORT
    if not updates:
        return place
    return place.model_copy(update=updates)


__all__ = [
    "PlaceSource",
    "clone_place",
    "contains_place",
    "is_duplicate",
    "iter_places",
    "new_day_id",
    "new_place_id",
    "place_ids",
    "promote_to_scheduled",
]
