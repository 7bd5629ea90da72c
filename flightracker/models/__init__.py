"""Pydantic models for the flightracker service."""

from .flights import UNKNOWN_CALLSIGN, Flight, FlightsResponse
from .geo import Bounds
from .route import Coordinates, RouteInfo

__all__ = [
    "Bounds",
    "Coordinates",
    "Flight",
    "FlightsResponse",
    "RouteInfo",
    "UNKNOWN_CALLSIGN",
]
