"""Route metadata returned for a selected aircraft."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Airport position in decimal degrees."""

    lat: float
    lon: float

    model_config = ConfigDict(frozen=True)


class RouteInfo(BaseModel):
    """Origin/destination display strings with optional airport positions.

    All fields are ``None`` when the callsign is unusable or the route is
    unknown to the lookup provider.
    """

    origin: Optional[str] = Field(
        default=None, description="'<name> (<code>) - <country>' of the departure airport"
    )
    destination: Optional[str] = Field(
        default=None, description="'<name> (<code>) - <country>' of the arrival airport"
    )
    origin_coords: Optional[Coordinates] = Field(default=None, alias="originCoords")
    destination_coords: Optional[Coordinates] = Field(
        default=None, alias="destinationCoords"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def empty(cls) -> "RouteInfo":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.origin is None and self.destination is None


__all__ = ["Coordinates", "RouteInfo"]
