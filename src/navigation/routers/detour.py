# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Detour routers -- temporary side trips that hand control back afterwards.

A detour is installed as the active router, remembers the router that was
active at that moment, walks to its single destination and, on arrival,
puts the previous router back and lets it plan the same tick.  Detours
nest: a detour installed during another detour restores that detour.

  - GoThereRouter: manual "go to this point" requests
  - BuildingVisitRouter: walk to a special building, run the in-game
    actions that only work there, then resume
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from loguru import logger

from navigation.routers.base import Router
from navigation.target import Target

if TYPE_CHECKING:
    from navigation.navigator import Navigator
    from navigation.world import Building


class GoThereRouter(Router):
    name = "goto"

    def __init__(
        self,
        navigator: Navigator,
        target: Target,
        previous: Router | None = None,
    ) -> None:
        super().__init__(navigator.ctx, navigator.waypoints)
        self.navigator = navigator
        self.target = target
        self.previous = previous if previous is not None else navigator.router

    def __repr__(self) -> str:
        return f"<{type(self).__name__} -> {self.target.lat:.6f},{self.target.lng:.6f}>"

    @property
    def planned(self) -> bool:
        return self.ctx.path.target is self.target

    def check_path(self) -> list[Target] | None:
        if not self.planned:
            # First tick, or a nested detour walked somewhere else meanwhile.
            # Replaces whatever the previous router was walking.
            path = self.generate_waypoints(self.target)
            self.ctx.path.target = self.target
            return path
        if self.ctx.path.in_transit:
            return None
        return self.finish()

    def on_arrival(self) -> None:
        """Hook for subclasses; runs before control is handed back."""

    def finish(self) -> list[Target] | None:
        self.on_arrival()
        if self.ctx.path.target is self.target:
            self.ctx.path.target = None
        logger.info(f"Detour done, back to {self.previous!r}")
        self.navigator.set_router(self.previous)
        return self.previous.check_path()


@dataclass
class ActionResult:
    """Outcome of one arrival action."""

    name: str
    ok: bool
    value: Any = None
    error: Exception | None = None


class BuildingVisitRouter(GoThereRouter):
    """Visit one building, run its actions, then resume the previous router.

    Each action runs on its own: a failing action is logged and recorded,
    and the remaining actions still run.  Nothing here prevents the
    previous router from being restored.
    """

    name = "visit"

    def __init__(
        self,
        navigator: Navigator,
        building: Building,
        actions: Mapping[str, Callable[[], Any]] | Iterable[tuple[str, Callable[[], Any]]] = (),
        previous: Router | None = None,
    ) -> None:
        target = Target(id=building.id, lat=building.lat, lng=building.lng)
        super().__init__(navigator, target, previous)
        self.building = building
        items = actions.items() if isinstance(actions, Mapping) else actions
        self.actions: list[tuple[str, Callable[[], Any]]] = list(items)
        self.results: list[ActionResult] = []

    def on_arrival(self) -> None:
        self.results = [self._run(name, action) for name, action in self.actions]
        failed = [r.name for r in self.results if not r.ok]
        if failed:
            logger.warning(f"Visit to {self.building.id}: {len(failed)} action(s) failed: {failed}")
        else:
            logger.info(f"Visit to {self.building.id} done ({len(self.results)} actions)")

    def _run(self, name: str, action: Callable[[], Any]) -> ActionResult:
        try:
            return ActionResult(name=name, ok=True, value=action())
        except Exception as e:
            logger.error(f"Action '{name}' at {self.building.id} failed: {e}")
            details = getattr(e, "details", None)
            if details is not None:
                logger.error(f"Details: {details!r}")
            return ActionResult(name=name, ok=False, error=e)
