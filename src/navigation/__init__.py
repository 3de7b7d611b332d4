# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Navigation core: target selection, waypoint expansion and walking.

    from navigation import Navigator, TickDriver
    nav = Navigator.from_settings(settings)
    TickDriver.from_settings(nav).run()
"""

from navigation.driver import PositionStore, TickDriver
from navigation.errors import DirectionsError, NavigationError, SnapshotError, TrackLoadError
from navigation.navigator import Navigator
from navigation.state import NavigationContext, PathState
from navigation.target import Position, Target
from navigation.world import WorldSnapshot

__all__ = [
    "Navigator",
    "TickDriver",
    "PositionStore",
    "NavigationContext",
    "PathState",
    "Position",
    "Target",
    "WorldSnapshot",
    "NavigationError",
    "DirectionsError",
    "TrackLoadError",
    "SnapshotError",
]
