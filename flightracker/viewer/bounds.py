"""Tracks the viewer's visible rectangle and reports settled changes."""

from __future__ import annotations

import logging
from typing import Callable

from flightracker.models import Bounds

logger = logging.getLogger("flightracker.viewer.bounds")

BoundsListener = Callable[[Bounds], None]


class BoundsTracker:
    """Hold the one current Bounds and notify subscribers when it settles.

    A renderer reports every viewport change through ``viewport_changed``;
    only settled changes (end of a pan or zoom) are published, and a settle
    event that leaves the rectangle unchanged (a zoom ends with both a move
    and a zoom event) is published once.
    """

    def __init__(self) -> None:
        self._current: Bounds | None = None
        self._listeners: list[BoundsListener] = []

    @property
    def current(self) -> Bounds | None:
        return self._current

    def subscribe(self, listener: BoundsListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self, bounds: Bounds) -> None:
        """Publish the initial viewport."""

        self._current = None
        self._publish(bounds)

    def viewport_changed(self, bounds: Bounds, *, settled: bool = True) -> None:
        if not settled:
            return
        if bounds == self._current:
            logger.debug("Ignoring settle event with unchanged bounds")
            return
        self._publish(bounds)

    def move_end(self, bounds: Bounds) -> None:
        self.viewport_changed(bounds, settled=True)

    def zoom_end(self, bounds: Bounds) -> None:
        self.viewport_changed(bounds, settled=True)

    def _publish(self, bounds: Bounds) -> None:
        self._current = bounds
        logger.debug("Bounds changed: %s", bounds)
        for listener in list(self._listeners):
            listener(bounds)


__all__ = ["BoundsListener", "BoundsTracker"]
