# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Walker -- moves the avatar one tick along its waypoint queue.

Each ``walk()`` call represents about one second of walking:

  1. speed = configured km/h with up to +/-5% jitter, converted to m/s
  2. steps = remaining distance / speed, i.e. seconds left at that pace
  3. move 1/steps of the way toward the first waypoint (capped at the
     waypoint itself so a short final leg never overshoots)
  4. fuzz the new position by up to 0.0000009 degrees per axis to mimic
     GPS noise (well under a meter)
  5. within ARRIVAL_RADIUS of the waypoint -> pop it

``fuzzed_location`` is also used on its own to report a noisy position
to the game server without touching the real one.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from loguru import logger

from navigation.tactical.geo import distance, latlng_of
from navigation.target import Position

if TYPE_CHECKING:
    from navigation.state import NavigationContext
    from navigation.tactical.elevation import ElevationProvider

ARRIVAL_RADIUS = 5.0
SPEED_JITTER = 0.1       # total spread, i.e. +/-5%
FUZZ_DEGREES = 0.0000009
FUZZ_DECIMALS = 14


class Walker:
    def __init__(
        self,
        ctx: NavigationContext,
        elevation: ElevationProvider | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.ctx = ctx
        self.elevation = elevation
        self._rng = rng or random.Random()

    def walk(self) -> None:
        """Advance the position one tick toward the first waypoint."""
        speed = self.ctx.settings.nav_speed
        path = self.ctx.path
        if speed == 0 or not path.waypoints:
            return

        dest = path.waypoints[0]
        speed += (self._rng.random() - 0.5) * speed * SPEED_JITTER
        speed_ms = speed / 3.6

        pos = self.ctx.position
        remaining = distance(pos, dest)
        steps = remaining / speed_ms
        fraction = 1.0 if steps <= 1.0 else 1.0 / steps

        moved = Position(
            lat=pos.lat + (dest.lat - pos.lat) * fraction,
            lng=pos.lng + (dest.lng - pos.lng) * fraction,
        )
        self.ctx.position = self.fuzzed_location(moved)

        if distance(self.ctx.position, dest) < ARRIVAL_RADIUS:
            path.waypoints.pop(0)
            if not path.waypoints:
                logger.debug(f"Reached {dest.id or 'destination'}")

    def fuzzed_location(self, point: Any) -> Position:
        """Return point with sub-meter random noise on both axes."""
        lat, lng = latlng_of(point)
        return Position(
            lat=round(lat + self._rand_between(-FUZZ_DEGREES, FUZZ_DEGREES), FUZZ_DECIMALS),
            lng=round(lng + self._rand_between(-FUZZ_DEGREES, FUZZ_DEGREES), FUZZ_DECIMALS),
        )

    def altitude(self, point: Any | None = None) -> float:
        """Ground elevation at point (default: current position), 0 on failure."""
        if self.elevation is None:
            return 0.0
        try:
            return float(self.elevation.elevation(point if point is not None else self.ctx.position))
        except Exception as e:
            logger.warning(f"Unable to get altitude: {e}")
            return 0.0

    def _rand_between(self, low: float, high: float) -> float:
        return round(self._rng.uniform(low, high), FUZZ_DECIMALS)
