# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Navigator -- the navigation core's face toward the tick driver.

Owns the NavigationContext, the waypoint generator, the walker and the
single active router handle.  The driver only ever calls:

    nav.check_path()   # router decides, maybe replaces the queue
    nav.walk()         # walker moves one step
    nav.position       # where we are now

Manual requests (``go_to``, ``visit_building``) install a detour router
that restores the current one when it is done.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from loguru import logger

from navigation.errors import NavigationError
from navigation.routers import BuildingVisitRouter, GoThereRouter, Router, create_router
from navigation.state import NavigationContext
from navigation.tactical.directions import DirectionsProvider, create_directions
from navigation.target import Position, Target
from navigation.walker import Walker
from navigation.waypoints import WaypointGenerator

if TYPE_CHECKING:
    import random

    from app.config import Settings
    from navigation.tactical.elevation import ElevationProvider
    from navigation.world import Building, WorldSnapshot


class Navigator:
    def __init__(
        self,
        ctx: NavigationContext,
        router: Router | str | None = None,
        directions: DirectionsProvider | None = None,
        elevation: ElevationProvider | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.ctx = ctx
        self.waypoints = WaypointGenerator(directions, follow_roads=ctx.settings.nav_follow_roads)
        self.walker = Walker(ctx, elevation=elevation, rng=rng)
        if isinstance(router, Router):
            self._router = router
        else:
            self._router = create_router(router or ctx.settings.nav_router, ctx, self.waypoints)
        logger.debug(f"Navigator ready with {self._router!r}")

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> Navigator:
        """Build a navigator with the collaborators the settings ask for."""
        from navigation.tactical.elevation import GoogleElevation

        ctx = NavigationContext.from_settings(settings)
        kwargs.setdefault("directions", create_directions(settings))
        if settings.gmap_key:
            kwargs.setdefault("elevation", GoogleElevation(settings.gmap_key, settings.http_timeout))
        return cls(ctx, **kwargs)

    # -- Router handle ---------------------------------------------------------

    @property
    def router(self) -> Router:
        return self._router

    def set_router(self, router: Router) -> None:
        if router is not self._router:
            logger.info(f"Router {self._router!r} -> {router!r}")
        self._router = router

    # -- Tick operations -------------------------------------------------------

    def check_path(self) -> list[Target] | None:
        return self._router.check_path()

    def walk(self) -> None:
        self.walker.walk()

    @property
    def position(self) -> Position:
        return self.ctx.position

    @position.setter
    def position(self, value: Position) -> None:
        self.ctx.position = value

    def fuzzed_position(self) -> Position:
        return self.walker.fuzzed_location(self.ctx.position)

    def altitude(self) -> float:
        return self.walker.altitude(self.ctx.position)

    def update_world(self, world: WorldSnapshot | None) -> None:
        """Swap in the latest map snapshot from the game client."""
        self.ctx.world = world

    # -- Manual requests -------------------------------------------------------

    def go_to(self, lat: float, lng: float, target_id: str | None = None) -> GoThereRouter:
        detour = GoThereRouter(self, Target(id=target_id, lat=lat, lng=lng))
        self.set_router(detour)
        return detour

    def visit_building(
        self,
        building: Building | str,
        actions: Mapping[str, Callable[[], Any]] | Iterable[tuple[str, Callable[[], Any]]] = (),
    ) -> BuildingVisitRouter:
        """Detour to a building, given directly or by id in the current world."""
        if isinstance(building, str):
            found = self.ctx.world.building(building) if self.ctx.world else None
            if found is None:
                raise NavigationError(f"Unknown building '{building}'")
            building = found
        detour = BuildingVisitRouter(self, building, actions)
        self.set_router(detour)
        return detour
