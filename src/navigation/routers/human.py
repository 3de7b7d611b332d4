# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""HumanRouter -- wander between whatever is closest, resupplying when low.

When the ball count drops under ``ball_threshold`` the nearest spinnable
stop wins regardless of what else is around (and even if it was visited
before, since stops refill).  Otherwise the nearest of three candidates
is chosen on raw distance: the nearest unvisited stop, the nearest
creature, the nearest unclaimed chest.  Categories are not weighted.
"""

from __future__ import annotations

from navigation.routers.base import RetargetingRouter
from navigation.target import Target


class HumanRouter(RetargetingRouter):
    name = "human"

    def find_next_target(self) -> Target | None:
        world = self.ctx.world
        if world is None:
            return None

        if world.ball_count < self.ctx.settings.ball_threshold:
            stop = self.closest_stop(include_visited=True)
            if stop is not None:
                return stop

        candidates = [
            c for c in (self.closest_stop(), self.closest_creature(), self.closest_chest())
            if c is not None
        ]
        if not candidates:
            return None
        return sorted(candidates, key=lambda t: t.distance)[0]
