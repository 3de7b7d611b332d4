# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""WaypointGenerator -- expands a target into the path the walker follows."""

from __future__ import annotations

from typing import Any

from loguru import logger

from navigation.tactical.directions import DirectionsProvider
from navigation.tactical.geo import distance
from navigation.target import Target

# Closer than this, asking for directions is pointless
ROAD_FOLLOW_MIN_DISTANCE = 10.0


class WaypointGenerator:
    def __init__(self, directions: DirectionsProvider | None = None, follow_roads: bool = True) -> None:
        self.directions = directions
        self.follow_roads = follow_roads

    def expand(self, origin: Any, target: Target, follow_roads: bool | None = None) -> list[Target]:
        """Return the ordered waypoints from origin to target, target last.

        Raises DirectionsError when the directions lookup fails.  The
        returned list is new; callers install it as the path queue in one
        assignment so a failed lookup never leaves a partial queue.
        """
        follow = self.follow_roads if follow_roads is None else follow_roads
        if not follow or self.directions is None:
            return [target]
        if distance(origin, target) <= ROAD_FOLLOW_MIN_DISTANCE:
            return [target]

        points = self.directions.route(origin, target)
        waypoints = [Target(id=None, lat=lat, lng=lng) for lat, lng in points]
        waypoints.append(target)
        logger.debug(
            f"{self.directions.name} route to {target.id or 'destination'}: "
            f"{len(waypoints)} waypoints"
        )
        return waypoints
