# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Exceptions raised by the navigation core.

"Nothing to do" is never an exception: routers return ``None`` for that.
These are reserved for collaborator failures and malformed input, and the
tick driver is the one place that catches them.
"""

from __future__ import annotations


class NavigationError(Exception):
    """Base class for navigation failures."""


class DirectionsError(NavigationError):
    """A directions lookup failed (no route, quota, network, bad key)."""

    def __init__(self, message: str, provider: str = "directions"):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class TrackLoadError(NavigationError):
    """A track file is missing, unreadable, invalid, or empty."""


class SnapshotError(NavigationError):
    """A world snapshot could not be parsed."""
