"""Pydantic domain models.

Every model is frozen: operations build the next snapshot with
``model_copy(update=...)`` and never mutate one in place.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from tripboard.domain.constants import DEFAULT_DAY_START, POOL_KEY, SEARCH_KEY
from tripboard.domain.enums import TransportMode


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Coordinates(_Frozen):
    lat: float
    lng: float


class Place(_Frozen):
    id: str
    name: str
    description: str = ""
    coordinates: Coordinates
    estimated_time: Optional[str] = None
    stay_minutes: Optional[int] = Field(default=None, ge=1)
    transport_to_next: Optional[TransportMode] = None
    travel_minutes_to_next: Optional[int] = Field(default=None, ge=0)
    transport_notes: Optional[str] = None


class PlaceCandidate(_Frozen):
    """A place offered by the discovery service, not yet part of a plan."""

    name: str
    description: str = ""
    lat: float
    lng: float
    estimated_time: Optional[str] = None


class Day(_Frozen):
    id: str
    title: str
    start_time: str = DEFAULT_DAY_START
    places: tuple[Place, ...] = ()


class ItineraryState(_Frozen):
    pool: tuple[Place, ...] = ()
    days: tuple[Day, ...] = ()


class PoolLocation(_Frozen):
    kind: Literal["pool"] = "pool"


class DayLocation(_Frozen):
    kind: Literal["day"] = "day"
    day_id: str


class SearchLocation(_Frozen):
    """The current list of discovery results; only ever a move source."""

    kind: Literal["search"] = "search"


Location = Annotated[
    Union[PoolLocation, DayLocation, SearchLocation],
    Field(discriminator="kind"),
]


def parse_location(raw: str) -> Location:
    """Build a location from the flat string form used by gesture intents."""
    text = str(raw or "").strip()
    if text == POOL_KEY:
        return PoolLocation()
    if text == SEARCH_KEY:
        return SearchLocation()
    return DayLocation(day_id=text)


def location_key(location: Location) -> str:
    if isinstance(location, DayLocation):
        return location.day_id
    if isinstance(location, SearchLocation):
        return SEARCH_KEY
    return POOL_KEY


class Slot(_Frozen):
    location: Location
    index: int


class MoveIntent(_Frozen):
    source: Slot
    destination: Optional[Slot] = None

    @classmethod
    def from_gesture(
        cls,
        source_location: str,
        source_index: int,
        dest_location: Optional[str] = None,
        dest_index: Optional[int] = None,
    ) -> "MoveIntent":
        source = Slot(location=parse_location(source_location), index=source_index)
        if dest_location is None or dest_index is None:
            return cls(source=source, destination=None)
        return cls(
            source=source,
            destination=Slot(location=parse_location(dest_location), index=dest_index),
        )


class TimelineEntry(_Frozen):
    place_id: str
    start: str
    end: str
    day_offset: int = 0


class Expense(_Frozen):
    id: str
    description: str
    amount: float = Field(gt=0)
    payer: str
    involved: tuple[str, ...] = ()


class Ledger(_Frozen):
    participants: tuple[str, ...] = ()
    expenses: tuple[Expense, ...] = ()


class Settlement(_Frozen):
    from_participant: str = Field(alias="from")
    to: str
    amount: float = Field(gt=0)
