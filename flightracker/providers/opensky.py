"""OpenSky snapshot client producing normalized flights.

State vectors arrive as positional arrays. Only these indices are read:

1: callsign       - padded to 8 chars, may be null
5: longitude      - WGS84 degrees
6: latitude       - WGS84 degrees
7: baro_altitude  - meters
9: velocity       - ground speed (m/s)
10: true_track    - degrees clockwise from north
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from flightracker.config import settings
from flightracker.models.flights import UNKNOWN_CALLSIGN, Flight
from flightracker.providers.errors import NetworkError, UpstreamError
from flightracker.providers.token import TokenManager

logger = logging.getLogger("flightracker.providers.opensky")

CALLSIGN = 1
LONGITUDE = 5
LATITUDE = 6
BARO_ALTITUDE = 7
VELOCITY = 9
TRUE_TRACK = 10


def _field(entry: Sequence[Any], index: int) -> Any:
    return entry[index] if len(entry) > index else None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _m_to_km(value_m: Any) -> float | None:
    value = _to_float(value_m)
    return value / 1000 if value is not None else None


def _normalize_callsign(raw: Any) -> str:
    if not isinstance(raw, str):
        return UNKNOWN_CALLSIGN
    return raw.strip() or UNKNOWN_CALLSIGN


def normalize_state(entry: Any) -> Optional[Flight]:
    """Map one raw state vector to a Flight, or None when it has no position."""

    if not isinstance(entry, (list, tuple)):
        return None

    lat = _to_float(_field(entry, LATITUDE))
    lon = _to_float(_field(entry, LONGITUDE))
    if lat is None or lon is None:
        return None

    return Flight(
        callsign=_normalize_callsign(_field(entry, CALLSIGN)),
        lat=lat,
        lon=lon,
        altitude=_m_to_km(_field(entry, BARO_ALTITUDE)),
        velocity=_to_float(_field(entry, VELOCITY)),
        heading=_to_float(_field(entry, TRUE_TRACK)),
    )


class SnapshotFetcher:
    """Fetch the full OpenSky state list with a bearer token."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        token_manager: TokenManager,
        states_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.http_client = http_client
        self.token_manager = token_manager
        self.states_url = states_url or settings.opensky_states_url
        self.timeout = timeout or settings.opensky_timeout

    async def fetch_snapshot(self) -> list[Flight]:
        token = await self.token_manager.obtain()

        try:
            response = await self.http_client.get(
                self.states_url,
                headers={"Authorization": token.authorization},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("OpenSky snapshot request timed out: %s", exc)
            raise NetworkError("OpenSky snapshot request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("OpenSky snapshot request failed: %s", exc)
            raise NetworkError("OpenSky snapshot request failed") from exc

        if response.status_code == 401:
            # Rejected before its expiry; the next poll re-authenticates.
            self.token_manager.invalidate()
        if not response.is_success:
            logger.warning(
                "OpenSky returned HTTP %s: %s",
                response.status_code,
                response.text[:200],
            )
            raise UpstreamError(response.status_code, "OpenSky failed")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Failed to parse OpenSky JSON response: %s", exc)
            raise NetworkError("OpenSky returned an undecodable snapshot") from exc

        raw_states = payload.get("states") if isinstance(payload, dict) else None
        if raw_states is None:
            raw_states = []
        elif not isinstance(raw_states, list):
            logger.warning(
                "OpenSky snapshot has a non-list states field: %s", type(raw_states).__name__
            )
            raise NetworkError("OpenSky returned an undecodable snapshot")

        flights: list[Flight] = []
        for entry in raw_states:
            flight = normalize_state(entry)
            if flight is not None:
                flights.append(flight)

        logger.debug(
            "Normalized %s of %s OpenSky state vectors", len(flights), len(raw_states)
        )
        return flights


__all__ = ["SnapshotFetcher", "normalize_state"]
