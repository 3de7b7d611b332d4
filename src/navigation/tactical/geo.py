# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Geo math -- distances and local-meter projections for lat/lng points.

Everything here is a pure function.  Distances are great-circle (haversine)
on the WGS84 equatorial radius, so they are deterministic and symmetric.

Local projections are equirectangular around a reference point, which is
accurate to well under a meter over the few kilometers a walking avatar
covers between map refreshes.

Convention:
    - +X = East, +Y = North, 1 unit = 1 meter
    - Points are accepted in any of the shapes the game client hands out
      (see ``latlng_of``)
"""

from __future__ import annotations

import math
from typing import Any

EARTH_RADIUS_M = 6_378_137.0
METERS_PER_DEG_LAT = 111_320.0


def meters_per_deg_lng(lat: float) -> float:
    return METERS_PER_DEG_LAT * math.cos(math.radians(lat))


# ---------------------------------------------------------------------------
# Point normalization
# ---------------------------------------------------------------------------

_LAT_KEYS = ("lat", "latitude")
_LNG_KEYS = ("lng", "lon", "longitude")


def _pick(source: Any, keys: tuple[str, ...], getter) -> float | None:
    for key in keys:
        value = getter(source, key)
        if value is not None:
            return float(value)
    return None


def latlng_of(point: Any) -> tuple[float, float]:
    """Normalize a point-like value to a ``(lat, lng)`` tuple.

    Accepts:
        - objects with ``lat``/``lng`` (Target, Position) or
          ``latitude``/``longitude`` attributes
        - objects or dicts carrying a ``coords`` member holding either of
          the above (game buildings, creatures, chests)
        - dicts keyed ``lat``/``lng``/``lon``/``latitude``/``longitude``
        - ``(lat, lng)`` sequences

    Raises ValueError for anything else.
    """
    if isinstance(point, (tuple, list)):
        if len(point) < 2:
            raise ValueError(f"Point sequence needs (lat, lng), got {point!r}")
        return (float(point[0]), float(point[1]))

    if isinstance(point, dict):
        getter = lambda src, key: src.get(key)  # noqa: E731
        coords = point.get("coords")
    else:
        getter = lambda src, key: getattr(src, key, None)  # noqa: E731
        coords = getattr(point, "coords", None)

    lat = _pick(point, _LAT_KEYS, getter)
    lng = _pick(point, _LNG_KEYS, getter)
    if lat is None or lng is None:
        if coords is not None and coords is not point:
            return latlng_of(coords)
        raise ValueError(f"Cannot read lat/lng from {point!r}")
    return (lat, lng)


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------

def distance(a: Any, b: Any) -> float:
    """Great-circle distance in meters between two point-like values."""
    lat1, lng1 = latlng_of(a)
    lat2, lng2 = latlng_of(b)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)
    h = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


# ---------------------------------------------------------------------------
# Local projections
# ---------------------------------------------------------------------------

def latlng_to_local(
    lat: float, lng: float, ref_lat: float, ref_lng: float
) -> tuple[float, float]:
    """Convert lat/lng to local (x, y) meters relative to a reference point."""
    y = (lat - ref_lat) * METERS_PER_DEG_LAT
    x = (lng - ref_lng) * meters_per_deg_lng(ref_lat)
    return (x, y)


def local_to_latlng(
    x: float, y: float, ref_lat: float, ref_lng: float
) -> tuple[float, float]:
    """Inverse of ``latlng_to_local``."""
    lat = ref_lat + y / METERS_PER_DEG_LAT
    lng = ref_lng + x / meters_per_deg_lng(ref_lat)
    return (lat, lng)


def offset(point: Any, north_m: float, east_m: float) -> tuple[float, float]:
    """Return the (lat, lng) that lies north_m/east_m meters from point."""
    lat, lng = latlng_of(point)
    return local_to_latlng(east_m, north_m, lat, lng)
