# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""TrackRouter -- loop forever over the points of a GPX file.

The first tick loads the file and teleports the avatar to its first
point; every later empty-queue tick heads for the next point, wrapping
back to the start after the last one.  Paths are always single hops, the
track already is the path.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from navigation.errors import TrackLoadError
from navigation.routers.base import Router
from navigation.tactical.gpx import load_track
from navigation.target import Position, Target

if TYPE_CHECKING:
    from navigation.state import NavigationContext
    from navigation.waypoints import WaypointGenerator


class TrackRouter(Router):
    name = "track"

    def __init__(
        self,
        ctx: NavigationContext,
        waypoints: WaypointGenerator,
        track_file: str | Path | None = None,
    ) -> None:
        super().__init__(ctx, waypoints)
        self._track_file = track_file
        self.steps: list[Target] = []
        self.idx = 0

    @property
    def loaded(self) -> bool:
        return bool(self.steps)

    def track_path(self) -> Path | None:
        name = self._track_file or self.ctx.settings.track_file
        if not name:
            return None
        p = Path(name)
        return p if p.is_absolute() else Path(self.ctx.settings.data_dir) / p

    def init(self) -> None:
        """Load the track and seed the position.  Raises TrackLoadError."""
        path = self.track_path()
        if path is None:
            raise TrackLoadError("GPX file not defined")
        steps = load_track(path)
        if not steps:
            raise TrackLoadError(f"GPX file has no points: {path}")
        self.steps = steps
        self.ctx.position = Position(lat=steps[0].lat, lng=steps[0].lng)
        self.idx = 1 % len(steps)
        logger.info(f"Track loaded from {path}: {len(steps)} points")

    def check_path(self) -> list[Target] | None:
        if not self.loaded:
            self.init()
        if self.ctx.path.in_transit:
            return None
        target = self.steps[self.idx]
        self.idx = (self.idx + 1) % len(self.steps)
        self.ctx.path.target = target
        self.ctx.path.waypoints = [target]
        return [target]
