# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Router strategies and the name registry used by settings.

    from navigation.routers import create_router
    router = create_router("human", ctx, waypoints)

Detour routers are not in the registry; the Navigator installs them on
request (``go_to``, ``visit_building``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from navigation.routers.base import RetargetingRouter, Router, nearest
from navigation.routers.creatures import CreatureRouter
from navigation.routers.detour import ActionResult, BuildingVisitRouter, GoThereRouter
from navigation.routers.human import HumanRouter
from navigation.routers.stationary import StationaryRouter
from navigation.routers.stops import StopRouter
from navigation.routers.track import TrackRouter

if TYPE_CHECKING:
    from navigation.state import NavigationContext
    from navigation.waypoints import WaypointGenerator

__all__ = [
    "Router",
    "RetargetingRouter",
    "StationaryRouter",
    "StopRouter",
    "HumanRouter",
    "CreatureRouter",
    "TrackRouter",
    "GoThereRouter",
    "BuildingVisitRouter",
    "ActionResult",
    "nearest",
    "router_names",
    "create_router",
]

DEFAULT_ROUTER = "stops"

_registry: dict[str, type[Router]] = {
    cls.name: cls
    for cls in (StationaryRouter, StopRouter, HumanRouter, CreatureRouter, TrackRouter)
}


def router_names() -> list[str]:
    return sorted(_registry)


def create_router(name: str, ctx: NavigationContext, waypoints: WaypointGenerator) -> Router:
    """Instantiate the router registered under name (falls back to 'stops')."""
    cls = _registry.get(name)
    if cls is None:
        logger.warning(f"Unknown router '{name}', using '{DEFAULT_ROUTER}'")
        cls = _registry[DEFAULT_ROUTER]
    return cls(ctx, waypoints)
