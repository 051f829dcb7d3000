"""Domain constants shared by deterministic logic."""

from tripboard.domain.enums import TransportMode

DEFAULT_STAY_MINUTES = 60
DEFAULT_TRAVEL_MINUTES = 15
DEFAULT_TRANSPORT = TransportMode.CAR
MIN_STAY_MINUTES = 1
MIN_TRAVEL_MINUTES = 0

DEFAULT_DAY_START = "09:00"
MINUTES_PER_DAY = 24 * 60

# Balances within this tolerance count as settled.
SETTLEMENT_EPSILON = 0.01

DEFAULT_PARTICIPANTS = ("Alice", "Bob", "Carol")

POOL_KEY = "pool"
SEARCH_KEY = "search"
