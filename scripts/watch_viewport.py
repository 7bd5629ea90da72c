#!/usr/bin/env python
"""
Drive a viewer session against a running flightracker service and print what
a map renderer would draw.

Usage (from repo root, with the service listening on FLIGHTRACKER_API_BASE_URL):
    python scripts/watch_viewport.py
"""

import asyncio

from flightracker.models import Bounds
from flightracker.viewer import FlightTrackerClient, ViewerSession


# Greater London
LONDON = Bounds(south=51.2, west=-0.6, north=51.8, east=0.4)
# Pan east over the Thames estuary
ESTUARY = Bounds(south=51.2, west=0.2, north=51.8, east=1.2)


def render(session: ViewerSession) -> None:
    if session.loading:
        print("Loading…")
        return
    print(f"{len(session.flights)} aircraft in view")
    if session.selected is not None:
        print(
            f"  selected={session.selected.callsign!r} "
            f"origin={session.route.origin or 'Not available'} "
            f"destination={session.route.destination or 'Not available'}"
        )


async def main() -> None:
    async with FlightTrackerClient() as client:
        session = ViewerSession(client, on_change=render)

        print("=== Initial viewport: London ===")
        session.start(LONDON)
        await asyncio.sleep(5)

        if session.flights:
            first = session.flights[0]
            print(f"\nSelecting {first.callsign} at {first.lat:.3f}, {first.lon:.3f}")
            session.select(first)
            await asyncio.sleep(3)

        print("\n=== Panning east ===")
        session.bounds.move_end(ESTUARY)
        await asyncio.sleep(12)

        await session.stop()


if __name__ == "__main__":
    asyncio.run(main())
