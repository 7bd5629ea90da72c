"""Loads route metadata for the currently selected aircraft."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from flightracker.config import settings
from flightracker.models import Flight, RouteInfo
from flightracker.providers.adsbdb import usable_callsign

logger = logging.getLogger("flightracker.viewer.selection")

FetchRoute = Callable[[str], Awaitable[RouteInfo]]
RouteListener = Callable[[Flight | None, RouteInfo], None]


class SelectionRouteLoader:
    """One outstanding route request, keyed to the current selection."""

    def __init__(
        self,
        *,
        fetch: FetchRoute,
        on_route: RouteListener | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self._fetch = fetch
        self._on_route = on_route
        self.request_timeout = request_timeout or settings.viewer_request_timeout

        self.epoch = 0
        self.selected: Flight | None = None
        self.route = RouteInfo.empty()
        # Flight whose lookup produced `route`; lags `selected` while a lookup runs.
        self.route_for: Flight | None = None
        self._inflight: asyncio.Task[None] | None = None

    def select(self, flight: Flight | None) -> asyncio.Task[None] | None:
        """Change the selection; returns the lookup task when one was started."""

        self.epoch += 1
        self._cancel_inflight()
        self.selected = flight

        callsign = usable_callsign(flight.callsign) if flight is not None else None
        if callsign is None:
            self._publish(flight, RouteInfo.empty())
            return None

        self._inflight = asyncio.create_task(self._run_lookup(self.epoch, flight, callsign))
        return self._inflight

    @property
    def current_route(self) -> RouteInfo:
        """The route of the current selection, empty while its lookup is pending."""

        if self.route_for != self.selected:
            return RouteInfo.empty()
        return self.route

    def clear(self) -> None:
        self.select(None)

    async def stop(self) -> None:
        task = self._inflight
        self._inflight = None
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    def _cancel_inflight(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    async def _run_lookup(self, epoch: int, flight: Flight, callsign: str) -> None:
        try:
            route = await asyncio.wait_for(self._fetch(callsign), timeout=self.request_timeout)
        except Exception as exc:
            if epoch != self.epoch:
                return
            logger.warning("Route lookup for %s failed: %s", callsign, exc)
            self._publish(flight, RouteInfo.empty())
            return

        if epoch != self.epoch:
            logger.debug("Discarding route for %s from superseded selection", callsign)
            return
        self._publish(flight, route)

    def _publish(self, flight: Flight | None, route: RouteInfo) -> None:
        self.route = route
        self.route_for = flight
        if self._on_route is not None:
            self._on_route(flight, route)


__all__ = ["FetchRoute", "RouteListener", "SelectionRouteLoader"]
