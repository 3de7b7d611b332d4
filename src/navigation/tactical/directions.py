# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Directions collaborators -- turn an origin/destination into road waypoints.

Two providers share one shape, ``route(origin, destination)``, returning
the ordered intermediate (lat, lng) points and raising DirectionsError on
any failure:

  - GoogleDirections: Google Maps Directions API in walking mode.  Each
    step's ``end_location`` becomes a waypoint.
  - StreetGraphDirections: OpenStreetMap roads from Overpass, routed
    locally with A*.  No API key, and once cached it works offline.

HTTP is synchronous (httpx) because the tick driver runs one tick at a
time anyway.
"""

from __future__ import annotations

import math
from typing import Any, Protocol

import httpx
from loguru import logger

from navigation.errors import DirectionsError
from navigation.tactical.geo import distance, latlng_of
from navigation.tactical.street_graph import StreetGraph

_DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
_USER_AGENT = "GeoWalker/0.1.0"

# Statuses that mean "the request itself went fine".  Everything else,
# including no route at all, is a failure.
_OK_STATUSES = {"OK", None}


class DirectionsProvider(Protocol):
    name: str

    def route(self, origin: Any, destination: Any) -> list[tuple[float, float]]:
        ...


# ---------------------------------------------------------------------------
# Google
# ---------------------------------------------------------------------------

def _fetch_directions(
    origin: tuple[float, float],
    destination: tuple[float, float],
    api_key: str,
    timeout: float,
) -> dict:
    params = {
        "origin": f"{origin[0]},{origin[1]}",
        "destination": f"{destination[0]},{destination[1]}",
        "mode": "walking",
        "key": api_key,
    }
    with httpx.Client(timeout=timeout) as client:
        resp = client.get(_DIRECTIONS_URL, params=params, headers={"User-Agent": _USER_AGENT})
        resp.raise_for_status()
    return resp.json()


class GoogleDirections:
    """Walking directions from the Google Maps Directions API."""

    name = "google"

    def __init__(self, api_key: str, timeout: float = 10.0) -> None:
        self._api_key = api_key
        self._timeout = timeout

    def route(self, origin: Any, destination: Any) -> list[tuple[float, float]]:
        try:
            data = _fetch_directions(
                latlng_of(origin), latlng_of(destination), self._api_key, self._timeout
            )
        except httpx.HTTPError as e:
            raise DirectionsError(str(e) or type(e).__name__, self.name) from e
        except ValueError as e:
            raise DirectionsError(f"invalid response: {e}", self.name) from e

        if data.get("error_message"):
            raise DirectionsError(data["error_message"], self.name)
        status = data.get("status")
        if status not in _OK_STATUSES:
            raise DirectionsError(f"status {status}", self.name)

        points: list[tuple[float, float]] = []
        routes = data.get("routes") or []
        try:
            if routes:
                for leg in routes[0].get("legs") or []:
                    for step in leg.get("steps") or []:
                        loc = step["end_location"]
                        points.append((float(loc["lat"]), float(loc["lng"])))
        except (KeyError, TypeError, ValueError) as e:
            raise DirectionsError(f"malformed route: {e}", self.name) from e
        return points


# ---------------------------------------------------------------------------
# OpenStreetMap
# ---------------------------------------------------------------------------

class StreetGraphDirections:
    """Walking directions over an Overpass street graph.

    The graph is (re)loaded around the midpoint of a request whenever
    either end falls outside the area already loaded.
    """

    name = "osm"

    def __init__(
        self,
        radius_m: float = 1500.0,
        cache_dir: str = "~/.cache/geowalker",
        timeout: float = 30.0,
        graph: StreetGraph | None = None,
    ) -> None:
        self._radius_m = radius_m
        self._cache_dir = cache_dir
        self._timeout = timeout
        self._graph = graph if graph is not None else StreetGraph()

    @property
    def graph(self) -> StreetGraph:
        return self._graph

    def route(self, origin: Any, destination: Any) -> list[tuple[float, float]]:
        o_lat, o_lng = latlng_of(origin)
        d_lat, d_lng = latlng_of(destination)

        if not (self._graph.covers(o_lat, o_lng) and self._graph.covers(d_lat, d_lng)):
            span = distance((o_lat, o_lng), (d_lat, d_lng))
            radius = max(self._radius_m, span / 2 + 250.0)
            mid_lat, mid_lng = (o_lat + d_lat) / 2, (o_lng + d_lng) / 2
            logger.debug(f"Loading street graph around {mid_lat:.5f},{mid_lng:.5f} r={radius:.0f}m")
            if not self._graph.load(mid_lat, mid_lng, radius, self._cache_dir, self._timeout):
                raise DirectionsError("no street data for this area", self.name)

        start = self._graph.to_local(o_lat, o_lng)
        end = self._graph.to_local(d_lat, d_lng)
        local = self._graph.shortest_path(start, end)
        if not local:
            raise DirectionsError("no walkable route", self.name)

        # The first node is only a snap point; skip it when we are standing on it
        if len(local) > 1 and math.dist(local[0], start) < 1.0:
            local = local[1:]
        return self._graph.to_latlng(local)


def create_directions(settings) -> DirectionsProvider | None:
    """Build the provider named by ``settings.directions_provider``."""
    if not settings.nav_follow_roads:
        return None
    provider = settings.directions_provider.lower()
    if provider == "osm":
        return StreetGraphDirections(
            radius_m=settings.street_graph_radius,
            cache_dir=settings.geo_cache_dir,
            timeout=max(settings.http_timeout, 30.0),
        )
    if provider != "google":
        logger.warning(f"Unknown directions provider '{provider}', using 'google'")
    if not settings.gmap_key:
        logger.warning("Road following with Google directions but no gmap_key set")
    return GoogleDirections(settings.gmap_key, timeout=settings.http_timeout)
