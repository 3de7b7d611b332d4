# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Elevation lookups from the Google Maps Elevation API.

Best-effort: callers (``Walker.altitude``) treat any exception as "0 m".
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from navigation.tactical.geo import latlng_of

_ELEVATION_URL = "https://maps.googleapis.com/maps/api/elevation/json"
_USER_AGENT = "GeoWalker/0.1.0"


class ElevationProvider(Protocol):
    def elevation(self, point: Any) -> float:
        ...


def _fetch_elevation(lat: float, lng: float, api_key: str, timeout: float) -> dict:
    with httpx.Client(timeout=timeout) as client:
        resp = client.get(
            _ELEVATION_URL,
            params={"locations": f"{lat},{lng}", "key": api_key},
            headers={"User-Agent": _USER_AGENT},
        )
        resp.raise_for_status()
    return resp.json()


class GoogleElevation:
    def __init__(self, api_key: str, timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._timeout = timeout

    def elevation(self, point: Any) -> float:
        """Meters above sea level, 0.0 when the API has no result."""
        lat, lng = latlng_of(point)
        data = _fetch_elevation(lat, lng, self._api_key, self._timeout)
        if data.get("error_message"):
            raise RuntimeError(data["error_message"])
        results = data.get("results") or []
        if not results:
            return 0.0
        return float(results[0]["elevation"])
