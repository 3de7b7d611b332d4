# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Router base class and the candidate-selection helpers strategies share.

A router is asked once per tick whether the current path still holds.
It returns the new waypoint queue when it re-planned, or None when the
driver has nothing to do.  Path state lives in the NavigationContext;
routers only touch it inside ``check_path``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable

from loguru import logger

from navigation.tactical.geo import distance, latlng_of
from navigation.target import Target

if TYPE_CHECKING:
    from navigation.state import NavigationContext
    from navigation.waypoints import WaypointGenerator
    from navigation.world import Building, Creature, WorldSnapshot


def nearest(origin: Any, candidates: Iterable[Any]) -> Target | None:
    """Closest candidate to origin as a Target carrying its distance.

    Ties go to the earlier candidate (stable sort).
    """
    scored = []
    for c in candidates:
        lat, lng = latlng_of(c)
        scored.append(Target(id=getattr(c, "id", None), lat=lat, lng=lng, distance=distance(origin, (lat, lng))))
    if not scored:
        return None
    return sorted(scored, key=lambda t: t.distance)[0]


def unique_creatures(world: WorldSnapshot) -> list[Creature]:
    """Wild sightings then radar sightings, first occurrence of each id kept."""
    seen: set[str] = set()
    out = []
    for c in [*world.wild_creatures, *world.radar_creatures]:
        if c.id not in seen:
            seen.add(c.id)
            out.append(c)
    return out


class Router(ABC):
    """Base for all target-selection strategies."""

    name: str = "router"

    def __init__(self, ctx: NavigationContext, waypoints: WaypointGenerator) -> None:
        self.ctx = ctx
        self.waypoints = waypoints

    @abstractmethod
    def check_path(self) -> list[Target] | None:
        """Re-plan if needed.  Returns the new queue or None."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    # -- Shared plumbing ------------------------------------------------------

    def distance(self, point: Any) -> float:
        return distance(self.ctx.position, point)

    def generate_waypoints(self, target: Target) -> list[Target]:
        """Expand target into a path and install it as the queue.

        The queue is only replaced once the expansion succeeded.
        """
        path = self.waypoints.expand(self.ctx.position, target)
        self.ctx.path.waypoints = path
        return list(path)

    def record_arrival(self, keep_target: bool = False) -> None:
        """Idle with a target set means we reached it: remember it.

        The target is cleared unless ``keep_target``, which lets a router
        that re-evaluates every tick recognise it is already parked there.
        """
        path = self.ctx.path
        if path.target is None or path.in_transit:
            return
        if path.target.id is not None and path.target.id not in path.visited:
            logger.debug(f"Arrived at {path.target.id}")
        path.mark_visited(path.target.id)
        if not keep_target:
            path.target = None

    # -- Candidate selection ---------------------------------------------------

    def eligible_stops(self, include_visited: bool = False) -> list[Building]:
        world = self.ctx.world
        if world is None:
            return []
        visited = self.ctx.path.visited
        return [
            b for b in world.buildings
            if b.eligible and (include_visited or b.id not in visited)
        ]

    def closest_stop(self, include_visited: bool = False) -> Target | None:
        return nearest(self.ctx.position, self.eligible_stops(include_visited))

    def closest_creature(self) -> Target | None:
        if self.ctx.world is None:
            return None
        return nearest(self.ctx.position, unique_creatures(self.ctx.world))

    def closest_chest(self) -> Target | None:
        if self.ctx.world is None:
            return None
        return nearest(self.ctx.position, [c for c in self.ctx.world.chests if not c.claimed])


class RetargetingRouter(Router):
    """Re-evaluates the best target every tick and re-plans when it moves.

    Used by strategies chasing things that come and go (creatures, chests),
    where the nearest candidate can change mid-transit.  A reached target
    stays in ``path.target``, so a creature still standing there does not
    trigger a new plan every tick.
    """

    @abstractmethod
    def find_next_target(self) -> Target | None:
        ...

    def check_path(self) -> list[Target] | None:
        self.record_arrival(keep_target=True)
        if self.ctx.world is None:
            return None
        target = self.find_next_target()
        if target is None or target.same_place(self.ctx.path.target):
            return None
        path = self.generate_waypoints(target)
        self.ctx.path.target = target
        logger.info(f"New target {target.id} at {target.distance:.0f}m")
        return path
