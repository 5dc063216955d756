#!/usr/bin/env python3
"""
Example: directions, isochrones and a matrix from GraphHopper

Scenario:
1. Print the directions request without sending it (dry run)
2. Route through three points in Heidelberg
3. Compute 10 minute driving isochrones in two buckets
4. Compute a duration/distance matrix from the first point

Run:
    GRAPHHOPPER_API_KEY=... python example_graphhopper.py
"""

import asyncio

from routekit import GraphHopper, RoutingAPIError, Waypoint
from routekit.core.logging import setup_logging
from routekit.routers.graphhopper import GraphHopperProfile

POINTS = [
    (49.41461, 8.681495),
    (49.41943, 8.686507),
    Waypoint(lat=49.420318, lon=8.687872),
]


async def main():
    setup_logging()
    gh = GraphHopper.from_settings()

    # 1. Dry run
    print("📝 Directions request:")
    print(gh.directions_dry_run(POINTS, GraphHopperProfile.CAR, {"instructions": False}))
    print()

    try:
        # 2. Directions
        directions = await gh.directions(POINTS, GraphHopperProfile.CAR, {"instructions": False})
        for i, direction in enumerate(directions):
            print(
                f"🚗 Route {i}: {direction.distance / 1000:.1f} km, "
                f"{direction.duration / 60000:.1f} min, "
                f"{len(direction.geometry['coordinates'])} points"
            )

        # 3. Isochrones
        isochrones = await gh.reachability(POINTS[0], GraphHopperProfile.CAR, [600], {"buckets": 2})
        for isochrone in isochrones:
            print(f"🗺  Bucket {isochrone.interval} ({isochrone.interval_type}) around {isochrone.center}")

        # 4. Matrix
        matrix = await gh.matrix(POINTS, GraphHopperProfile.CAR, {"sources": [0]})
        print(f"⏱  Durations from first point: {matrix.durations[0]}")
        print(f"📏 Distances from first point: {matrix.distances[0]}")

    except RoutingAPIError as e:
        print(f"❌ {e.status_code} {e.error_message}")
        for hint in e.hints:
            print(f"   hint: {hint.get('message')} (point {hint.get('point_index')})")


if __name__ == "__main__":
    asyncio.run(main())
