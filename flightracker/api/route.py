"""Route lookup endpoint for a selected aircraft."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from flightracker.api.dependencies import get_route_resolver
from flightracker.models import RouteInfo
from flightracker.providers import RouteResolver, UpstreamError

router = APIRouter(prefix="/api", tags=["route"])

logger = logging.getLogger("flightracker.api.route")


@router.get(
    "/route/{callsign:path}",
    response_model=RouteInfo,
    summary="Origin and destination for a callsign",
)
async def get_route(
    callsign: str,
    resolver: RouteResolver = Depends(get_route_resolver),
):
    """Resolve a callsign; unknown or unusable callsigns yield an all-null route."""

    try:
        return await resolver.resolve_route(callsign)
    except UpstreamError as exc:
        return JSONResponse(status_code=exc.status_code, content={"error": "ADSBdb failed"})
    except Exception:
        logger.exception("Unexpected failure resolving route for %s", callsign)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"origin": None, "destination": None},
        )
