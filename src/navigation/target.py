# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Position and Target value types.

Both are frozen: the walker replaces the position each tick and routers
replace targets rather than editing them in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from navigation.tactical.geo import latlng_of


@dataclass(frozen=True)
class Position:
    """Where the avatar currently is."""

    lat: float
    lng: float

    @classmethod
    def of(cls, point: Any) -> Position:
        lat, lng = latlng_of(point)
        return cls(lat=lat, lng=lng)

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Target:
    """A destination or intermediate waypoint.

    ``id`` identifies the in-game object (building, creature, chest) and is
    what ends up in the visited set.  Road-following intermediate points
    and manual destinations may have no id.  ``distance`` caches the
    distance from the position at the time the target was chosen.
    """

    id: str | None
    lat: float
    lng: float
    distance: float | None = None

    @classmethod
    def of(cls, point: Any, id: str | None = None, distance: float | None = None) -> Target:
        lat, lng = latlng_of(point)
        return cls(id=id, lat=lat, lng=lng, distance=distance)

    def same_place(self, other: Target | None) -> bool:
        """True when other points at exactly the same coordinates."""
        return other is not None and self.lat == other.lat and self.lng == other.lng
