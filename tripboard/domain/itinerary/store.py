"""Itinerary store operations.

Each operation takes an ``ItineraryState`` and returns the next one. An
operation that is silently ignored returns the very same object, so callers
can tell a no-op apart with an identity check.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from tripboard.domain.constants import DEFAULT_DAY_START
from tripboard.domain.exceptions import InvalidFieldError, OutOfRangeError, UnknownLocationError
from tripboard.domain.itinerary.registry import (
    PlaceSource,
    clone_place,
    is_duplicate,
    new_day_id,
    promote_to_scheduled,
)
from tripboard.domain.models import (
    Day,
    DayLocation,
    ItineraryState,
    Location,
    MoveIntent,
    Place,
    PoolLocation,
    Slot,
    location_key,
)

FIRST_DAY_ID = "day-1"

_PLACE_FIELDS = {
    "name",
    "description",
    "estimated_time",
    "stay_minutes",
    "transport_to_next",
    "travel_minutes_to_next",
    "transport_notes",
}
_DAY_FIELDS = {"title", "start_time"}

_M = TypeVar("_M", bound=BaseModel)


def day_title(position: int) -> str:
    return f"Day {position}"


def new_itinerary() -> ItineraryState:
    return ItineraryState(days=(Day(id=FIRST_DAY_ID, title=day_title(1)),))


def find_day(state: ItineraryState, day_id: str) -> Day | None:
    for day in state.days:
        if day.id == day_id:
            return day
    return None


def get_sequence(state: ItineraryState, location: Location) -> tuple[Place, ...]:
    if isinstance(location, PoolLocation):
        return state.pool
    if isinstance(location, DayLocation):
        day = find_day(state, location.day_id)
        if day is None:
            raise UnknownLocationError(location.day_id)
        return day.places
    raise UnknownLocationError(location_key(location))


def _replace_sequence(state: ItineraryState, location: Location, places: Sequence[Place]) -> ItineraryState:
    if isinstance(location, PoolLocation):
        return state.model_copy(update={"pool": tuple(places)})
    if not isinstance(location, DayLocation):
        raise UnknownLocationError(location_key(location))
    days = tuple(
        day.model_copy(update={"places": tuple(places)}) if day.id == location.day_id else day
        for day in state.days
    )
    return state.model_copy(update={"days": days})


def _check_index(location: Location, index: int, length: int) -> None:
    if index < 0 or index >= length:
        raise OutOfRangeError(location_key(location), index, length)


def _clamp_insert(index: int, length: int) -> int:
    return max(0, min(index, length))


def _renumber(days: Sequence[Day]) -> tuple[Day, ...]:
    return tuple(
        day if day.title == day_title(pos) else day.model_copy(update={"title": day_title(pos)})
        for pos, day in enumerate(days, start=1)
    )


def add_to_pool(state: ItineraryState, candidate: PlaceSource) -> ItineraryState:
    if is_duplicate(state, candidate):
        return state
    return state.model_copy(update={"pool": state.pool + (clone_place(candidate),)})


def insert_place(state: ItineraryState, candidate: PlaceSource, dest: Slot) -> ItineraryState:
    """Add a fresh copy of ``candidate`` at ``dest``; days promote it to scheduled."""
    if is_duplicate(state, candidate):
        return state
    places = list(get_sequence(state, dest.location))
    place = clone_place(candidate)
    if isinstance(dest.location, DayLocation):
        place = promote_to_scheduled(place)
    places.insert(_clamp_insert(dest.index, len(places)), place)
    return _replace_sequence(state, dest.location, places)


def is_noop_move(intent: MoveIntent) -> bool:
    dest = intent.destination
    if dest is None:
        return True
    return location_key(intent.source.location) == location_key(dest.location) and intent.source.index == dest.index


def move(state: ItineraryState, intent: MoveIntent) -> ItineraryState:
    source = intent.source
    dest = intent.destination
    if dest is None or is_noop_move(intent):
        return state
    if not isinstance(dest.location, (PoolLocation, DayLocation)):
        return state

    source_places = list(get_sequence(state, source.location))
    _check_index(source.location, source.index, len(source_places))
    same_list = location_key(source.location) == location_key(dest.location)
    dest_places = source_places if same_list else list(get_sequence(state, dest.location))

    moved = source_places.pop(source.index)
    if isinstance(dest.location, DayLocation):
        moved = promote_to_scheduled(moved)
    dest_places.insert(_clamp_insert(dest.index, len(dest_places)), moved)

    state = _replace_sequence(state, source.location, source_places)
    if not same_list:
        state = _replace_sequence(state, dest.location, dest_places)
    return state


def remove_at(state: ItineraryState, location: Location, index: int) -> ItineraryState:
    places = list(get_sequence(state, location))
    _check_index(location, index, len(places))
    del places[index]
    return _replace_sequence(state, location, places)


def add_day(state: ItineraryState) -> ItineraryState:
    day = Day(id=new_day_id(), title=day_title(len(state.days) + 1), start_time=DEFAULT_DAY_START)
    return state.model_copy(update={"days": _renumber(state.days + (day,))})


def remove_day(state: ItineraryState, day_id: str) -> ItineraryState:
    """Drop a day and its places; the last remaining day is never removed."""
    if find_day(state, day_id) is None:
        raise UnknownLocationError(day_id)
    if len(state.days) <= 1:
        return state
    remaining = [day for day in state.days if day.id != day_id]
    return state.model_copy(update={"days": _renumber(remaining)})


def move_day(state: ItineraryState, day_id: str, index: int) -> ItineraryState:
    """Reorder days. Titles keep their labels; only membership changes renumber."""
    day = find_day(state, day_id)
    if day is None:
        raise UnknownLocationError(day_id)
    current = next(pos for pos, d in enumerate(state.days) if d.id == day_id)
    days = [d for d in state.days if d.id != day_id]
    target = _clamp_insert(index, len(days))
    if target == current:
        return state
    days.insert(target, day)
    return state.model_copy(update={"days": tuple(days)})


def _merge(fields: Mapping[str, Any], allowed: set[str]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key in allowed}


def _revalidate(current: _M, updates: dict[str, Any]) -> _M:
    """Rebuild ``current`` with ``updates`` through full model validation."""
    try:
        return type(current).model_validate({**current.model_dump(), **updates})
    except ValidationError as exc:
        loc = exc.errors()[0]["loc"]
        field = str(loc[0]) if loc else "?"
        raise InvalidFieldError(field, updates.get(field)) from None


def update_place(state: ItineraryState, day_id: str, index: int, fields: Mapping[str, Any]) -> ItineraryState:
    location = DayLocation(day_id=day_id)
    places = list(get_sequence(state, location))
    _check_index(location, index, len(places))
    updates = _merge(fields, _PLACE_FIELDS)
    if not updates:
        return state
    places[index] = _revalidate(places[index], updates)
    return _replace_sequence(state, location, places)


def update_day(state: ItineraryState, day_id: str, fields: Mapping[str, Any]) -> ItineraryState:
    if find_day(state, day_id) is None:
        raise UnknownLocationError(day_id)
    updates = _merge(fields, _DAY_FIELDS)
    if not updates:
        return state
    days = tuple(_revalidate(day, updates) if day.id == day_id else day for day in state.days)
    return state.model_copy(update={"days": days})


__all__ = [
    "FIRST_DAY_ID",
    "add_day",
    "add_to_pool",
    "day_title",
    "find_day",
    "get_sequence",
    "insert_place",
    "is_noop_move",
    "move",
    "move_day",
    "new_itinerary",
    "remove_at",
    "remove_day",
    "update_day",
    "update_place",
]
