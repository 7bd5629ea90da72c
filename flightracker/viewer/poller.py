"""Viewport-driven snapshot polling with stale-result suppression.

Each bounds change starts a new epoch. A fetch captures the epoch it was
started under and only touches published state if that epoch is still
current when it finishes; superseded fetches are also cancelled.
"""

from __future__ import annotations

import asyncio
from enum import Enum
import logging
from typing import Awaitable, Callable, Sequence

from flightracker.config import settings
from flightracker.models import Bounds, Flight

logger = logging.getLogger("flightracker.viewer.poller")

FetchFlights = Callable[[], Awaitable[Sequence[Flight]]]


class PollerState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"


def filter_visible(flights: Sequence[Flight], bounds: Bounds) -> list[Flight]:
    return [flight for flight in flights if bounds.contains(flight.lat, flight.lon)]


class ViewportPoller:
    """Fetch the snapshot on bounds change and on a fixed interval."""

    def __init__(
        self,
        *,
        fetch: FetchFlights,
        on_flights: Callable[[list[Flight]], None] | None = None,
        on_loading: Callable[[bool], None] | None = None,
        interval: float | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self._fetch = fetch
        self._on_flights = on_flights
        self._on_loading = on_loading
        self.interval = interval or settings.viewer_poll_interval
        self.request_timeout = request_timeout or settings.viewer_request_timeout

        self.state = PollerState.IDLE
        self.epoch = 0
        self.bounds: Bounds | None = None
        self.flights: list[Flight] = []
        self.loading = False

        self._inflight: asyncio.Task[None] | None = None
        self._timer: asyncio.Task[None] | None = None

    def bounds_changed(self, bounds: Bounds) -> asyncio.Task[None]:
        """Invalidate in-flight work, restart the timer and fetch immediately."""

        self.bounds = bounds
        self.epoch += 1
        self._restart_timer()
        return self._start_fetch()

    def tick(self) -> asyncio.Task[None] | None:
        """Refresh under the current epoch; skipped while a fetch is running."""

        if self.bounds is None or self.state is not PollerState.IDLE:
            return None
        return self._start_fetch()

    async def stop(self) -> None:
        tasks = [task for task in (self._timer, self._inflight) if task is not None]
        self._timer = self._inflight = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.state = PollerState.IDLE

    def _restart_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.create_task(self._run_timer())

    async def _run_timer(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()

    def _start_fetch(self) -> asyncio.Task[None]:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        self.state = PollerState.FETCHING
        self._set_loading(True)
        self._inflight = asyncio.create_task(self._run_fetch(self.epoch))
        return self._inflight

    async def _run_fetch(self, epoch: int) -> None:
        try:
            flights = await asyncio.wait_for(self._fetch(), timeout=self.request_timeout)
        except Exception as exc:
            if epoch != self.epoch:
                logger.debug("Discarding failed fetch from superseded epoch %s", epoch)
                return
            logger.warning("Flight snapshot fetch failed: %s", exc)
            self._publish([])
            return

        if epoch != self.epoch:
            logger.debug("Discarding snapshot from superseded epoch %s", epoch)
            return

        if self.bounds is None:
            return
        visible = filter_visible(flights, self.bounds)
        logger.debug("Publishing %s of %s flights in view", len(visible), len(flights))
        self._publish(visible)

    def _publish(self, flights: list[Flight]) -> None:
        self.flights = flights
        self._set_loading(False)
        self.state = PollerState.IDLE
        if self._on_flights is not None:
            self._on_flights(flights)

    def _set_loading(self, loading: bool) -> None:
        if self.loading == loading:
            return
        self.loading = loading
        if self._on_loading is not None:
            self._on_loading(loading)


__all__ = ["FetchFlights", "PollerState", "ViewportPoller", "filter_visible"]
