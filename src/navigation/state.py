# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Path state and the navigation context shared by router and walker.

Ownership:
    - routers write ``path.target`` and ``path.visited``
    - routers replace ``path.waypoints`` wholesale (one assignment)
    - the walker pops ``path.waypoints[0]`` on arrival and replaces
      ``position``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from navigation.target import Position, Target

if TYPE_CHECKING:
    from app.config import Settings
    from navigation.world import WorldSnapshot


@dataclass
class PathState:
    visited: set[str] = field(default_factory=set)
    waypoints: list[Target] = field(default_factory=list)
    target: Target | None = None

    @property
    def in_transit(self) -> bool:
        return bool(self.waypoints)

    def mark_visited(self, target_id: str | None) -> None:
        if target_id is not None:
            self.visited.add(target_id)


@dataclass
class NavigationContext:
    """Explicit replacement for the client's global config/state objects."""

    settings: Settings
    position: Position
    path: PathState = field(default_factory=PathState)
    world: WorldSnapshot | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> NavigationContext:
        return cls(
            settings=settings,
            position=Position(lat=settings.start_lat, lng=settings.start_lng),
        )
