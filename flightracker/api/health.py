"""Service health and upstream readiness."""

from fastapi import APIRouter, Request

from flightracker.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check(request: Request) -> dict[str, str | bool]:
    """Report whether OpenSky credentials are configured and a token is cached."""

    token_manager = getattr(request.app.state, "token_manager", None)
    return {
        "status": "ok",
        "env": settings.flightracker_env,
        "opensky_credentials": settings.has_opensky_credentials,
        "token_cached": token_manager is not None and token_manager.token is not None,
    }
