"""Route lookup against the adsbdb callsign API."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from flightracker.config import settings
from flightracker.models.flights import UNKNOWN_CALLSIGN
from flightracker.models.route import Coordinates, RouteInfo
from flightracker.providers.errors import NetworkError, UpstreamError

logger = logging.getLogger("flightracker.providers.adsbdb")

UNKNOWN_NAME = "Unknown"
UNKNOWN_CODE = "N/A"


def usable_callsign(callsign: str | None) -> str | None:
    """Return the trimmed callsign, or None when it cannot be looked up."""

    if not callsign:
        return None
    cleaned = callsign.strip()
    if not cleaned or cleaned == UNKNOWN_CALLSIGN:
        return None
    return cleaned


def format_airport(airport: Optional[dict[str, Any]]) -> str:
    """Render an airport as ``"<name> (<code>) - <country>"``."""

    airport = airport or {}
    name = airport.get("name") or UNKNOWN_NAME
    code = airport.get("iata_code") or airport.get("icao_code") or UNKNOWN_CODE
    country = airport.get("country_name") or UNKNOWN_NAME
    return f"{name} ({code}) - {country}"


def airport_coordinates(airport: Optional[dict[str, Any]]) -> Coordinates | None:
    if not airport:
        return None
    lat = airport.get("latitude")
    lon = airport.get("longitude")
    if lat is None or lon is None:
        return None
    try:
        return Coordinates(lat=float(lat), lon=float(lon))
    except (TypeError, ValueError):
        logger.debug("Ignoring malformed airport coordinates: %s, %s", lat, lon)
        return None


def parse_flightroute(payload: Any) -> RouteInfo:
    """Build RouteInfo from an adsbdb callsign response body."""

    response = payload.get("response") if isinstance(payload, dict) else None
    route = response.get("flightroute") if isinstance(response, dict) else None
    if not isinstance(route, dict):
        return RouteInfo.empty()

    origin = route.get("origin") if isinstance(route.get("origin"), dict) else None
    destination = (
        route.get("destination") if isinstance(route.get("destination"), dict) else None
    )
    return RouteInfo(
        origin=format_airport(origin),
        destination=format_airport(destination),
        origin_coords=airport_coordinates(origin),
        destination_coords=airport_coordinates(destination),
    )


class RouteResolver:
    """Resolve a callsign to its scheduled origin and destination."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.http_client = http_client
        self.base_url = (base_url or settings.adsbdb_base_url).rstrip("/")
        self.timeout = timeout or settings.adsbdb_timeout

    async def resolve_route(self, callsign: str | None) -> RouteInfo:
        cleaned = usable_callsign(callsign)
        if cleaned is None:
            return RouteInfo.empty()

        url = f"{self.base_url}/callsign/{quote(cleaned, safe='')}"
        try:
            response = await self.http_client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            logger.warning("Route lookup for %s timed out: %s", cleaned, exc)
            raise NetworkError("Route lookup timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("Route lookup for %s failed: %s", cleaned, exc)
            raise NetworkError("Route lookup failed") from exc

        if response.status_code == 404:
            logger.debug("No known route for %s", cleaned)
            return RouteInfo.empty()
        if not response.is_success:
            logger.warning(
                "adsbdb returned HTTP %s for %s: %s",
                response.status_code,
                cleaned,
                response.text[:200],
            )
            raise UpstreamError(response.status_code, "ADSBdb failed")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse adsbdb JSON response: %s", exc)
            raise NetworkError("adsbdb returned an undecodable route") from exc

        route = parse_flightroute(payload)
        logger.debug("Resolved route for %s: %s -> %s", cleaned, route.origin, route.destination)
        return route


__all__ = [
    "RouteResolver",
    "airport_coordinates",
    "format_airport",
    "parse_flightroute",
    "usable_callsign",
]
