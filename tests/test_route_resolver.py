import httpx
import pytest

from flightracker.models import Coordinates
from flightracker.providers import NetworkError, RouteResolver, UpstreamError, format_airport

BASE_URL = "https://adsbdb.test/v0"


def _resolver(handler) -> tuple[httpx.AsyncClient, RouteResolver]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client, RouteResolver(http_client=client, base_url=BASE_URL)


@pytest.mark.anyio
async def test_resolve_route_builds_display_strings_and_coordinates():
    seen: list[httpx.Request] = []
    payload = {
        "response": {
            "flightroute": {
                "callsign": "BAW123",
                "origin": {
                    "name": "Heathrow",
                    "iata_code": "LHR",
                    "icao_code": "EGLL",
                    "country_name": "UK",
                    "latitude": 51.47,
                    "longitude": -0.45,
                },
                "destination": {
                    "name": "John F Kennedy International",
                    "iata_code": "JFK",
                    "country_name": "United States",
                    "latitude": 40.64,
                    "longitude": -73.78,
                },
            }
        }
    }

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    client, resolver = _resolver(handler)
    async with client:
        route = await resolver.resolve_route("  BAW123 ")

    assert seen[0].url.path == "/v0/callsign/BAW123"
    assert route.origin == "Heathrow (LHR) - UK"
    assert route.origin_coords == Coordinates(lat=51.47, lon=-0.45)
    assert route.destination == "John F Kennedy International (JFK) - United States"
    assert route.destination_coords == Coordinates(lat=40.64, lon=-73.78)


@pytest.mark.anyio
async def test_resolve_route_applies_fallbacks_and_suppresses_partial_coordinates():
    payload = {
        "response": {
            "flightroute": {
                "origin": {"icao_code": "EGLL", "latitude": 51.47},
                "destination": None,
            }
        }
    }
    client, resolver = _resolver(lambda request: httpx.Response(200, json=payload))
    async with client:
        route = await resolver.resolve_route("BAW123")

    assert route.origin == "Unknown (EGLL) - Unknown"
    assert route.destination == "Unknown (N/A) - Unknown"
    assert route.origin_coords is None
    assert route.destination_coords is None


@pytest.mark.anyio
@pytest.mark.parametrize("callsign", ["", "   ", "N/A", " N/A ", None])
async def test_unusable_callsign_never_calls_provider(callsign):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500)

    client, resolver = _resolver(handler)
    async with client:
        route = await resolver.resolve_route(callsign)

    assert route.is_empty
    assert calls == []


@pytest.mark.anyio
async def test_unknown_callsign_is_not_an_error():
    client, resolver = _resolver(
        lambda request: httpx.Response(404, json={"response": "unknown callsign"})
    )
    async with client:
        route = await resolver.resolve_route("ZZZ999")

    assert route.origin is None
    assert route.destination is None


@pytest.mark.anyio
async def test_missing_flightroute_is_empty():
    client, resolver = _resolver(
        lambda request: httpx.Response(200, json={"response": {"aircraft": {}}})
    )
    async with client:
        route = await resolver.resolve_route("BAW123")

    assert route.is_empty


@pytest.mark.anyio
async def test_error_status_raises_upstream_error():
    client, resolver = _resolver(lambda request: httpx.Response(429, text="slow down"))
    async with client:
        with pytest.raises(UpstreamError) as excinfo:
            await resolver.resolve_route("BAW123")

    assert excinfo.value.status_code == 429


@pytest.mark.anyio
async def test_timeout_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client, resolver = _resolver(handler)
    async with client:
        with pytest.raises(NetworkError):
            await resolver.resolve_route("BAW123")


def test_format_airport_prefers_iata_over_icao():
    airport = {"name": "Schiphol", "iata_code": "AMS", "icao_code": "EHAM", "country_name": "NL"}

    assert format_airport(airport) == "Schiphol (AMS) - NL"
    assert format_airport(None) == "Unknown (N/A) - Unknown"
