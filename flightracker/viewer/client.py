"""HTTP client for the flightracker service, used by the viewer loops."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from flightracker.config import settings
from flightracker.models import Flight, FlightsResponse, RouteInfo

logger = logging.getLogger("flightracker.viewer.client")


class FlightTrackerClient:
    """Fetch flights and routes from a running flightracker service."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.viewer_api_base_url
        self.timeout = timeout or settings.viewer_request_timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=transport
        )

    async def __aenter__(self) -> "FlightTrackerClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_flights(self) -> list[Flight]:
        response = await self._client.get("/api/flights")
        response.raise_for_status()
        return FlightsResponse.model_validate(response.json()).flights

    async def fetch_route(self, callsign: str) -> RouteInfo:
        response = await self._client.get(f"/api/route/{quote(callsign, safe='')}")
        response.raise_for_status()
        return RouteInfo.model_validate(response.json())


__all__ = ["FlightTrackerClient"]
