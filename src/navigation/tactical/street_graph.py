# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Walkable street graph built from OpenStreetMap Overpass data.

Road and footpath points become nodes, consecutive points on a way become
edges weighted by their length in meters.  Routing is A* over that graph
with straight-line distance as the heuristic.

Coordinates inside the graph are local meters around the point the graph
was loaded for (+X = East, +Y = North), see ``navigation.tactical.geo``.
Graphs are pickled to a disk cache keyed on center and radius.
"""

from __future__ import annotations

import hashlib
import math
import pickle
import time
from pathlib import Path
from typing import Optional

import httpx
import networkx as nx
from loguru import logger

from navigation.tactical.geo import latlng_to_local, local_to_latlng

_OVERPASS_URL = "https://overpass-api.de/api/interpreter"
_USER_AGENT = "GeoWalker/0.1.0"
_CACHE_EXPIRY_S = 24 * 3600
_DEFAULT_CACHE_DIR = "~/.cache/geowalker"

# Ways a pedestrian can use.  Motorways and trunks are left out.
_WALKABLE = (
    "primary|secondary|tertiary|unclassified|residential|service|"
    "living_street|pedestrian|footway|path|steps|track|cycleway"
)


def _node_key(x: float, y: float) -> tuple[float, float]:
    """Round to 0.1 m so ways sharing a point share a node."""
    return (round(x, 1), round(y, 1))


def _fetch_ways(lat: float, lng: float, radius_m: float, timeout: float = 30.0) -> list[dict]:
    """Fetch walkable ways with geometry around (lat, lng) from Overpass."""
    query = (
        f'[out:json];'
        f'way["highway"~"^({_WALKABLE})$"](around:{radius_m:.0f},{lat},{lng});'
        f'out geom;'
    )
    with httpx.Client(timeout=timeout) as client:
        resp = client.post(
            _OVERPASS_URL,
            data={"data": query},
            headers={"User-Agent": _USER_AGENT},
        )
        resp.raise_for_status()
    return resp.json().get("elements", [])


class StreetGraph:
    """A walking network around one reference point.

    Usage:
        sg = StreetGraph()
        if sg.load(lat, lng, radius_m=1500):
            points = sg.shortest_path((0.0, 0.0), (420.0, -130.0))
            latlngs = sg.to_latlng(points)
    """

    def __init__(self) -> None:
        self.graph: Optional[nx.Graph] = None
        self.ref_lat = 0.0
        self.ref_lng = 0.0
        self.radius_m = 0.0
        self._positions: dict[int, tuple[float, float]] = {}

    @property
    def loaded(self) -> bool:
        return self.graph is not None and bool(self._positions)

    def load(
        self,
        lat: float,
        lng: float,
        radius_m: float = 1500,
        cache_dir: str = _DEFAULT_CACHE_DIR,
        timeout: float = 30.0,
    ) -> bool:
        """Load the graph around (lat, lng), cache first then Overpass.

        Returns True when a non-empty graph is available afterwards.
        Fetch failures are logged and leave the graph unloaded.
        """
        self.graph = None
        self._positions = {}
        self.ref_lat, self.ref_lng, self.radius_m = lat, lng, radius_m

        cache_path = self._cache_path(lat, lng, radius_m, cache_dir)
        if cache_path.exists() and time.time() - cache_path.stat().st_mtime < _CACHE_EXPIRY_S:
            try:
                with open(cache_path, "rb") as f:
                    cached = pickle.load(f)
                self.graph = cached["graph"]
                self._positions = cached["positions"]
                logger.debug(f"Street graph loaded from cache: {len(self._positions)} nodes")
                return self.loaded
            except Exception as e:
                logger.warning(f"Street graph cache unreadable: {e}")

        try:
            elements = _fetch_ways(lat, lng, radius_m, timeout=timeout)
        except (httpx.HTTPError, OSError, ValueError) as e:
            logger.warning(f"Overpass fetch failed: {e}")
            return False

        self._build(elements)
        if not self.loaded:
            logger.info("No walkable ways returned by Overpass")
            self.graph = None
            return False

        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            with open(cache_path, "wb") as f:
                pickle.dump({"graph": self.graph, "positions": self._positions}, f)
        except OSError as e:
            logger.warning(f"Street graph cache save failed: {e}")
        return True

    def covers(self, lat: float, lng: float, margin: float = 0.8) -> bool:
        """True if (lat, lng) sits well inside the loaded radius."""
        if not self.loaded:
            return False
        x, y = latlng_to_local(lat, lng, self.ref_lat, self.ref_lng)
        return math.hypot(x, y) <= self.radius_m * margin

    def nearest_node(self, x: float, y: float) -> tuple[Optional[int], float]:
        best_id: Optional[int] = None
        best = float("inf")
        for nid, (nx_, ny_) in self._positions.items():
            d = math.hypot(x - nx_, y - ny_)
            if d < best:
                best, best_id = d, nid
        return (best_id, best)

    def shortest_path(
        self, start: tuple[float, float], end: tuple[float, float]
    ) -> Optional[list[tuple[float, float]]]:
        """Local-meter waypoints from the node nearest start to the node nearest end."""
        if not self.loaded:
            return None
        a, _ = self.nearest_node(*start)
        b, _ = self.nearest_node(*end)
        if a is None or b is None:
            return None
        if a == b:
            return [self._positions[a]]
        try:
            nodes = nx.astar_path(self.graph, a, b, heuristic=self._heuristic, weight="weight")
        except (nx.NetworkXNoPath, nx.NodeNotFound):
            return None
        return [self._positions[n] for n in nodes]

    def to_local(self, lat: float, lng: float) -> tuple[float, float]:
        return latlng_to_local(lat, lng, self.ref_lat, self.ref_lng)

    def to_latlng(self, points: list[tuple[float, float]]) -> list[tuple[float, float]]:
        return [local_to_latlng(x, y, self.ref_lat, self.ref_lng) for x, y in points]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _build(self, elements: list[dict]) -> None:
        G = nx.Graph()
        positions: dict[int, tuple[float, float]] = {}
        by_key: dict[tuple[float, float], int] = {}

        for el in elements:
            if el.get("type") != "way":
                continue
            geometry = el.get("geometry") or []
            if len(geometry) < 2:
                continue
            chain: list[int] = []
            for pt in geometry:
                local = self.to_local(pt["lat"], pt["lon"])
                key = _node_key(*local)
                nid = by_key.get(key)
                if nid is None:
                    nid = len(positions)
                    by_key[key] = nid
                    positions[nid] = local
                    G.add_node(nid)
                chain.append(nid)

            highway = (el.get("tags") or {}).get("highway", "path")
            for n1, n2 in zip(chain, chain[1:]):
                if n1 == n2:
                    continue
                length = math.dist(positions[n1], positions[n2])
                if G.has_edge(n1, n2) and G[n1][n2]["weight"] <= length:
                    continue
                G.add_edge(n1, n2, weight=length, highway=highway)

        self.graph = G
        self._positions = positions
        logger.info(
            f"Street graph built: {G.number_of_nodes()} nodes, "
            f"{G.number_of_edges()} edges from {len(elements)} ways"
        )

    def _heuristic(self, n1: int, n2: int) -> float:
        return math.dist(self._positions[n1], self._positions[n2])

    @staticmethod
    def _cache_path(lat: float, lng: float, radius_m: float, cache_dir: str) -> Path:
        key = f"walk_{lat:.5f}_{lng:.5f}_{radius_m:.0f}"
        digest = hashlib.sha256(key.encode()).hexdigest()[:16]
        return Path(cache_dir).expanduser() / f"{digest}.pkl"
