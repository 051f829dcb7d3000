"""Domain package exports."""

from tripboard.domain.constants import (
    DEFAULT_DAY_START,
    DEFAULT_PARTICIPANTS,
    DEFAULT_STAY_MINUTES,
    DEFAULT_TRANSPORT,
    DEFAULT_TRAVEL_MINUTES,
    SETTLEMENT_EPSILON,
)
from tripboard.domain.enums import TransportMode
from tripboard.domain.exceptions import (
    BlockedDeletionError,
    ConfirmationRequired,
    DomainError,
    InvalidExpenseError,
    InvalidFieldError,
    OutOfRangeError,
    UnknownLocationError,
)
from tripboard.domain.models import (
    Coordinates,
    Day,
    DayLocation,
    Expense,
    ItineraryState,
    Ledger,
    Location,
    MoveIntent,
    Place,
    PlaceCandidate,
    PoolLocation,
    SearchLocation,
    Settlement,
    Slot,
    TimelineEntry,
    location_key,
    parse_location,
)

__all__ = [
    "BlockedDeletionError",
    "ConfirmationRequired",
    "Coordinates",
    "Day",
    "DayLocation",
    "DomainError",
    "Expense",
    "InvalidExpenseError",
    "InvalidFieldError",
    "ItineraryState",
    "Ledger",
    "Location",
    "MoveIntent",
    "OutOfRangeError",
    "Place",
    "PlaceCandidate",
    "PoolLocation",
    "SearchLocation",
    "Settlement",
    "Slot",
    "TimelineEntry",
    "TransportMode",
    "UnknownLocationError",
    "location_key",
    "parse_location",
    "DEFAULT_DAY_START",
    "DEFAULT_PARTICIPANTS",
    "DEFAULT_STAY_MINUTES",
    "DEFAULT_TRANSPORT",
    "DEFAULT_TRAVEL_MINUTES",
    "SETTLEMENT_EPSILON",
]
