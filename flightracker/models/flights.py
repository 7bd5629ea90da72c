"""Models for aircraft positions served from the telemetry snapshot."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_CALLSIGN = "N/A"


class Flight(BaseModel):
    """One aircraft's current state, normalized from a raw state vector."""

    callsign: str = Field(
        default=UNKNOWN_CALLSIGN, description="Trimmed callsign, 'N/A' when blank"
    )
    lat: float = Field(..., description="Latitude in decimal degrees")
    lon: float = Field(..., description="Longitude in decimal degrees")
    altitude: Optional[float] = Field(
        default=None, description="Barometric altitude in kilometers"
    )
    velocity: Optional[float] = Field(
        default=None, description="Ground speed in provider units (m/s)"
    )
    heading: Optional[float] = Field(
        default=None, description="True track in degrees clockwise from north"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class FlightsResponse(BaseModel):
    """Payload of the flights endpoint."""

    flights: list[Flight] = Field(default_factory=list)


__all__ = ["Flight", "FlightsResponse", "UNKNOWN_CALLSIGN"]
