"""Wires the viewer loops together for a rendering surface."""

from __future__ import annotations

import logging
from typing import Callable

from flightracker.models import Bounds, Flight, RouteInfo
from flightracker.viewer.bounds import BoundsTracker
from flightracker.viewer.client import FlightTrackerClient
from flightracker.viewer.poller import ViewportPoller
from flightracker.viewer.selection import SelectionRouteLoader

logger = logging.getLogger("flightracker.viewer.session")


class ViewerSession:
    """Everything a map renderer needs: bounds in, flights and route out.

    The renderer reports viewport changes through ``bounds`` and clicks
    through ``select``; it reads ``flights``, ``loading``, ``selected`` and
    ``route``, or registers ``on_change`` to be told when any of them moves.
    """

    def __init__(
        self,
        client: FlightTrackerClient,
        *,
        interval: float | None = None,
        request_timeout: float | None = None,
        on_change: Callable[["ViewerSession"], None] | None = None,
    ) -> None:
        self.client = client
        self._on_change = on_change
        self.bounds = BoundsTracker()
        self.poller = ViewportPoller(
            fetch=client.fetch_flights,
            on_flights=self._changed,
            on_loading=self._changed,
            interval=interval,
            request_timeout=request_timeout,
        )
        self.selection = SelectionRouteLoader(
            fetch=client.fetch_route,
            on_route=self._route_changed,
            request_timeout=request_timeout,
        )
        self._unsubscribe = self.bounds.subscribe(self.poller.bounds_changed)

    @property
    def flights(self) -> list[Flight]:
        return self.poller.flights

    @property
    def loading(self) -> bool:
        return self.poller.loading

    @property
    def selected(self) -> Flight | None:
        return self.selection.selected

    @property
    def route(self) -> RouteInfo:
        return self.selection.current_route

    @property
    def route_for(self) -> Flight | None:
        return self.selection.route_for

    def start(self, bounds: Bounds) -> None:
        self.bounds.start(bounds)

    def select(self, flight: Flight | None) -> None:
        self.selection.select(flight)

    async def stop(self) -> None:
        self._unsubscribe()
        await self.poller.stop()
        await self.selection.stop()

    def _route_changed(self, flight: Flight | None, route: RouteInfo) -> None:
        logger.debug("Route for %s: %s -> %s", flight and flight.callsign, route.origin, route.destination)
        self._changed()

    def _changed(self, *_args) -> None:
        if self._on_change is not None:
            self._on_change(self)


__all__ = ["ViewerSession"]
