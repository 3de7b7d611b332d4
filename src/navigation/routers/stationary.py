# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""StationaryRouter -- the avatar stays where it is."""

from __future__ import annotations

from navigation.routers.base import Router
from navigation.target import Target


class StationaryRouter(Router):
    name = "stand"

    def check_path(self) -> list[Target] | None:
        return None
