"""Viewer-side core: viewport polling and selection-driven route loading."""

from .bounds import BoundsTracker
from .client import FlightTrackerClient
from .poller import PollerState, ViewportPoller, filter_visible
from .selection import SelectionRouteLoader
from .session import ViewerSession

__all__ = [
    "BoundsTracker",
    "FlightTrackerClient",
    "PollerState",
    "SelectionRouteLoader",
    "ViewerSession",
    "ViewportPoller",
    "filter_visible",
]
