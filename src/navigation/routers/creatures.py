# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""CreatureRouter -- chase creatures, fall back to stops when none are around."""

from __future__ import annotations

from navigation.routers.base import RetargetingRouter, nearest
from navigation.target import Target


class CreatureRouter(RetargetingRouter):
    """Nearest wild creature, else nearest radar sighting, else nearest stop."""

    name = "creatures"

    def find_next_target(self) -> Target | None:
        world = self.ctx.world
        if world is None:
            return None
        return (
            nearest(self.ctx.position, world.wild_creatures)
            or nearest(self.ctx.position, world.radar_creatures)
            or self.closest_stop()
        )
