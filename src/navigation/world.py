# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""World snapshot -- the read-only map view routers pick targets from.

The game protocol client refreshes the map every few seconds and hands
the navigation core a new snapshot.  Routers only read it.  Snapshots can
be built directly from the dataclasses or parsed from the plain dict
shape the client (or a JSON fixture file) produces::

    {
        "buildings": [{"id": "b1", "lat": 48.85, "lng": 2.35,
                       "type": "STOP", "available": true, "cooldown": false}],
        "creatures": {"wild": [...], "radar": [...]},
        "chests": [{"id": "c1", "lat": ..., "lng": ..., "claimed": false}],
        "inventory": [{"type": "MAGIC_BALL_SIMPLE", "count": 12}]
    }

Coordinates may also be nested under ``coords`` as
``{"latitude": .., "longitude": ..}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from navigation.errors import SnapshotError
from navigation.tactical.geo import latlng_of

STOP = "STOP"

BALL_ITEM_TYPES = frozenset({
    "MAGIC_BALL_SIMPLE",
    "MAGIC_BALL_NORMAL",
    "MAGIC_BALL_GOOD",
})


@dataclass(frozen=True)
class Building:
    id: str
    lat: float
    lng: float
    type: str = STOP
    available: bool = True
    cooldown: bool = False

    @property
    def is_stop(self) -> bool:
        return self.type == STOP

    @property
    def eligible(self) -> bool:
        """A stop that can be spun right now."""
        return self.is_stop and self.available and not self.cooldown


@dataclass(frozen=True)
class Creature:
    id: str
    lat: float
    lng: float
    name: str = ""


@dataclass(frozen=True)
class Chest:
    id: str
    lat: float
    lng: float
    claimed: bool = False


@dataclass(frozen=True)
class InventoryItem:
    type: str
    count: int = 0


@dataclass
class WorldSnapshot:
    """Everything the map refresh returned that navigation cares about."""

    buildings: list[Building] = field(default_factory=list)
    wild_creatures: list[Creature] = field(default_factory=list)
    radar_creatures: list[Creature] = field(default_factory=list)
    chests: list[Chest] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)

    def count_items(self, item_types: frozenset[str] | set[str]) -> int:
        return sum(item.count for item in self.inventory if item.type in item_types)

    @property
    def ball_count(self) -> int:
        return self.count_items(BALL_ITEM_TYPES)

    def building(self, building_id: str) -> Building | None:
        for b in self.buildings:
            if b.id == building_id:
                return b
        return None

    # -- Parsing -----------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorldSnapshot:
        """Parse the client's dict shape.  Raises SnapshotError if malformed."""
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot must be a mapping, got {type(data).__name__}")
        try:
            creatures = data.get("creatures") or {}
            return cls(
                buildings=[_parse_building(b) for b in data.get("buildings") or []],
                wild_creatures=[_parse_creature(c) for c in creatures.get("wild") or []],
                radar_creatures=[_parse_creature(c) for c in creatures.get("radar") or []],
                chests=[_parse_chest(c) for c in data.get("chests") or []],
                inventory=[
                    InventoryItem(type=str(i["type"]), count=int(i.get("count", 0)))
                    for i in data.get("inventory") or []
                ],
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Malformed world snapshot: {e}") from e


def _parse_building(raw: dict[str, Any]) -> Building:
    lat, lng = latlng_of(raw)
    # Older client dumps nest cooldown under the pitstop record
    pitstop = raw.get("pitstop")
    cooldown = raw.get("cooldown")
    if cooldown is None and isinstance(pitstop, dict):
        cooldown = pitstop.get("cooldown")
    return Building(
        id=str(raw["id"]),
        lat=lat,
        lng=lng,
        type=str(raw.get("type", STOP)),
        available=bool(raw.get("available", True)),
        cooldown=bool(cooldown),
    )


def _parse_creature(raw: dict[str, Any]) -> Creature:
    lat, lng = latlng_of(raw)
    return Creature(id=str(raw["id"]), lat=lat, lng=lng, name=str(raw.get("name", "")))


def _parse_chest(raw: dict[str, Any]) -> Chest:
    lat, lng = latlng_of(raw)
    return Chest(id=str(raw["id"]), lat=lat, lng=lng, claimed=bool(raw.get("claimed", False)))
