"""Domain enums."""

from enum import Enum


class TransportMode(str, Enum):
    CAR = "CAR"
    WALK = "WALK"
    TRANSIT = "TRANSIT"
