"""Geographic primitives for viewport filtering."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Bounds(BaseModel):
    """Rectangular latitude/longitude region currently visible to a viewer.

    Edges are inclusive. The rectangle does not wrap the antimeridian, so
    ``west`` must not exceed ``east``.
    """

    south: float = Field(..., ge=-90, le=90, description="Minimum latitude")
    west: float = Field(..., description="Minimum longitude")
    north: float = Field(..., ge=-90, le=90, description="Maximum latitude")
    east: float = Field(..., description="Maximum longitude")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_corners(self) -> "Bounds":
        if self.south > self.north:
            raise ValueError("south must not exceed north")
        if self.west > self.east:
            raise ValueError("west must not exceed east")
        return self

    @classmethod
    def from_corners(
        cls, south_west: tuple[float, float], north_east: tuple[float, float]
    ) -> "Bounds":
        """Build bounds from ``(lat, lon)`` south-west and north-east corners."""

        return cls(
            south=south_west[0],
            west=south_west[1],
            north=north_east[0],
            east=north_east[1],
        )

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east


__all__ = ["Bounds"]
