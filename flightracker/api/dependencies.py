"""FastAPI dependencies building provider clients from application state."""

from __future__ import annotations

from fastapi import Request

from flightracker.providers import RouteResolver, SnapshotFetcher


def get_snapshot_fetcher(request: Request) -> SnapshotFetcher:
    state = request.app.state
    return SnapshotFetcher(
        http_client=state.http_client,
        token_manager=state.token_manager,
    )


def get_route_resolver(request: Request) -> RouteResolver:
    return RouteResolver(http_client=request.app.state.http_client)


__all__ = ["get_route_resolver", "get_snapshot_fetcher"]
