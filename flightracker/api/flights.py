"""Live flight snapshot endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from flightracker.api.dependencies import get_snapshot_fetcher
from flightracker.models import FlightsResponse
from flightracker.providers import AuthError, SnapshotFetcher, UpstreamError

router = APIRouter(prefix="/api", tags=["flights"])

logger = logging.getLogger("flightracker.api.flights")


@router.get(
    "/flights",
    response_model=FlightsResponse,
    summary="Current positions of all tracked aircraft",
)
async def get_flights(
    fetcher: SnapshotFetcher = Depends(get_snapshot_fetcher),
):
    """Return every aircraft in the provider snapshot that reports a position."""

    try:
        flights = await fetcher.fetch_snapshot()
    except UpstreamError as exc:
        return JSONResponse(status_code=exc.status_code, content={"error": "OpenSky failed"})
    except AuthError as exc:
        logger.error("OpenSky authentication failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )
    except Exception:
        logger.exception("Unexpected failure fetching flights")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server error"},
        )

    logger.info("Serving %s flights", len(flights))
    return FlightsResponse(flights=flights)
