import httpx
import pytest

from flightracker.models import Flight
from flightracker.providers import (
    AuthError,
    NetworkError,
    SnapshotFetcher,
    TokenManager,
    UpstreamError,
    normalize_state,
)

TOKEN_URL = "https://auth.test/token"
STATES_URL = "https://opensky.test/api/states/all"


def _router(states_response: httpx.Response, seen: list[httpx.Request] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if str(request.url) == TOKEN_URL:
            return httpx.Response(200, json={"access_token": "abc", "expires_in": 1800})
        return states_response

    return handler


def _fetcher(client: httpx.AsyncClient) -> SnapshotFetcher:
    manager = TokenManager(
        http_client=client,
        client_id="id",
        client_secret="secret",
        token_url=TOKEN_URL,
    )
    return SnapshotFetcher(http_client=client, token_manager=manager, states_url=STATES_URL)


def test_normalize_state_maps_fixed_positions():
    raw = [None, "BAW123  ", None, None, None, -0.1, 51.5, 11000, None, 250, 90]

    flight = normalize_state(raw)

    assert flight == Flight(
        callsign="BAW123", lat=51.5, lon=-0.1, altitude=11.0, velocity=250, heading=90
    )


def test_normalize_state_defaults_blank_callsign_and_null_fields():
    raw = ["abc123", "        ", "UK", None, None, 2.0, 48.0, None, False, None, None]

    flight = normalize_state(raw)

    assert flight is not None
    assert flight.callsign == "N/A"
    assert flight.altitude is None
    assert flight.velocity is None
    assert flight.heading is None


def test_normalize_state_converts_altitude_to_kilometers():
    raw = ["abc123", "DLH4", "DE", None, None, 8.5, 50.0, 3657.6, False, 200.0, 180.0]

    assert normalize_state(raw).altitude == 3657.6 / 1000


@pytest.mark.parametrize(
    "raw",
    [
        ["abc123", "AAL1", "US", None, None, None, 40.0, 1000, False, 1, 1],
        ["abc123", "AAL1", "US", None, None, -73.0, None, 1000, False, 1, 1],
        ["abc123", "AAL1"],
        "not-a-state-vector",
        None,
    ],
)
def test_normalize_state_drops_records_without_position(raw):
    assert normalize_state(raw) is None


@pytest.mark.anyio
async def test_fetch_snapshot_sends_bearer_token_and_filters_positionless():
    payload = {
        "time": 1714765200,
        "states": [
            ["400a0b", "BAW123  ", "United Kingdom", 1714765198, 1714765200,
             -0.1, 51.5, 11000, False, 250, 90, 0, None, 11100, "1000", False, 0],
            ["400a0c", "EZY9", "United Kingdom", None, 1714765200,
             None, None, None, True, 0, None, None, None, None, None, False, 0],
        ],
    }
    seen: list[httpx.Request] = []
    transport = httpx.MockTransport(_router(httpx.Response(200, json=payload), seen))

    async with httpx.AsyncClient(transport=transport) as client:
        flights = await _fetcher(client).fetch_snapshot()

    assert [f.callsign for f in flights] == ["BAW123"]
    assert flights[0].altitude == 11.0
    states_request = seen[-1]
    assert states_request.headers["Authorization"] == "Bearer abc"


@pytest.mark.anyio
async def test_fetch_snapshot_handles_null_states():
    transport = httpx.MockTransport(
        _router(httpx.Response(200, json={"time": 1, "states": None}))
    )

    async with httpx.AsyncClient(transport=transport) as client:
        flights = await _fetcher(client).fetch_snapshot()

    assert flights == []


@pytest.mark.anyio
@pytest.mark.parametrize("states", [5, "BAW123", {"0": []}])
async def test_fetch_snapshot_rejects_non_list_states(states):
    transport = httpx.MockTransport(
        _router(httpx.Response(200, json={"time": 1, "states": states}))
    )

    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(NetworkError):
            await _fetcher(client).fetch_snapshot()


@pytest.mark.anyio
async def test_fetch_snapshot_raises_upstream_error_with_status():
    transport = httpx.MockTransport(_router(httpx.Response(503, text="unavailable")))

    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(UpstreamError) as excinfo:
            await _fetcher(client).fetch_snapshot()

    assert excinfo.value.status_code == 503


@pytest.mark.anyio
async def test_unauthorized_snapshot_drops_cached_token():
    transport = httpx.MockTransport(_router(httpx.Response(401, text="expired")))

    async with httpx.AsyncClient(transport=transport) as client:
        fetcher = _fetcher(client)
        with pytest.raises(UpstreamError):
            await fetcher.fetch_snapshot()

    assert fetcher.token_manager.token is None


@pytest.mark.anyio
async def test_fetch_snapshot_propagates_auth_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == TOKEN_URL:
            return httpx.Response(400, json={"error": "invalid_client"})
        raise AssertionError("states endpoint must not be called without a token")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AuthError):
            await _fetcher(client).fetch_snapshot()


@pytest.mark.anyio
async def test_fetch_snapshot_wraps_undecodable_body():
    transport = httpx.MockTransport(_router(httpx.Response(200, text="<html>")))

    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(NetworkError):
            await _fetcher(client).fetch_snapshot()
