# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""StopRouter -- greedy tour of the nearest stops not yet visited."""

from __future__ import annotations

from loguru import logger

from navigation.routers.base import Router
from navigation.target import Target


class StopRouter(Router):
    name = "stops"

    def check_path(self) -> list[Target] | None:
        if self.ctx.path.in_transit:
            return None
        self.record_arrival()
        return self.generate_path()

    def generate_path(self) -> list[Target] | None:
        logger.debug("Get new path.")
        target = self.find_next_target()
        if target is None:
            return None
        path = self.generate_waypoints(target)
        self.ctx.path.target = target
        logger.info(f"Heading to stop {target.id} ({target.distance:.0f}m)")
        return path

    def find_next_target(self) -> Target | None:
        return self.closest_stop()
