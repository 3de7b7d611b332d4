# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Tests for the walkable street graph built from Overpass data."""

from __future__ import annotations

import math
import os
import time
from pathlib import Path
from unittest.mock import patch

import networkx as nx
import pytest

from navigation.tactical.street_graph import StreetGraph

# Three streets around the reference point:
#   Rue Alpha: north-south at lng 2.3521
#   Rue Bravo: east-west at lat 48.8568
#   Rue Charlie: east-west at lat 48.8570
# Alpha meets Bravo at (48.8568, 2.3521) and Charlie at (48.8570, 2.3521).
_MOCK_WAYS = [
    {
        "type": "way",
        "id": 200001,
        "tags": {"highway": "residential", "name": "Rue Alpha"},
        "geometry": [
            {"lat": 48.8566, "lon": 2.3521},
            {"lat": 48.8568, "lon": 2.3521},
            {"lat": 48.8570, "lon": 2.3521},
        ],
    },
    {
        "type": "way",
        "id": 200002,
        "tags": {"highway": "footway", "name": "Rue Bravo"},
        "geometry": [
            {"lat": 48.8568, "lon": 2.3521},
            {"lat": 48.8568, "lon": 2.3526},
            {"lat": 48.8568, "lon": 2.3531},
        ],
    },
    {
        "type": "way",
        "id": 200003,
        "tags": {"highway": "pedestrian", "name": "Rue Charlie"},
        "geometry": [
            {"lat": 48.8570, "lon": 2.3521},
            {"lat": 48.8570, "lon": 2.3526},
            {"lat": 48.8570, "lon": 2.3531},
        ],
    },
    {"type": "node", "id": 1, "lat": 48.0, "lon": 2.0},
]

REF_LAT = 48.8566
REF_LNG = 2.3522


@pytest.fixture
def cache_dir(tmp_path):
    return str(tmp_path / "street_cache")


def _loaded(cache_dir: str) -> StreetGraph:
    with patch("navigation.tactical.street_graph._fetch_ways", return_value=_MOCK_WAYS):
        sg = StreetGraph()
        assert sg.load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir)
    return sg


@pytest.mark.unit
class TestGraphBuild:
    def test_nodes_and_edges(self, cache_dir):
        sg = _loaded(cache_dir)
        assert sg.loaded
        # 3 + 2 + 2 distinct points, the intersections are shared
        assert sg.graph.number_of_nodes() == 7
        assert sg.graph.number_of_edges() == 6

    def test_edge_weights_are_meters(self, cache_dir):
        sg = _loaded(cache_dir)
        for _, _, data in sg.graph.edges(data=True):
            assert 10.0 < data["weight"] < 60.0

    def test_intersections_connect_streets(self, cache_dir):
        sg = _loaded(cache_dir)
        assert nx.is_connected(sg.graph)

    def test_non_way_elements_ignored(self, cache_dir):
        sg = _loaded(cache_dir)
        far = sg.to_local(48.0, 2.0)
        _, dist = sg.nearest_node(*far)
        assert dist > 10_000


@pytest.mark.unit
class TestRouting:
    def test_nearest_node_empty_graph(self):
        node, dist = StreetGraph().nearest_node(0.0, 0.0)
        assert node is None
        assert dist == float("inf")

    def test_shortest_path_follows_streets(self, cache_dir):
        sg = _loaded(cache_dir)
        start = sg.to_local(48.8566, 2.3521)
        end = sg.to_local(48.8570, 2.3531)
        path = sg.shortest_path(start, end)
        assert path is not None
        assert len(path) >= 4
        assert math.dist(path[0], start) < 1.0
        assert math.dist(path[-1], end) < 1.0

    def test_every_waypoint_is_a_node(self, cache_dir):
        sg = _loaded(cache_dir)
        path = sg.shortest_path(sg.to_local(48.8566, 2.3521), sg.to_local(48.8568, 2.3531))
        for wp in path:
            _, dist = sg.nearest_node(*wp)
            assert dist < 0.01

    def test_same_node_gives_single_point(self, cache_dir):
        sg = _loaded(cache_dir)
        p = sg.to_local(48.8568, 2.3526)
        assert len(sg.shortest_path(p, p)) == 1

    def test_unloaded_graph_has_no_path(self):
        assert StreetGraph().shortest_path((0, 0), (10, 10)) is None

    def test_to_latlng_round_trip(self, cache_dir):
        sg = _loaded(cache_dir)
        (lat, lng), = sg.to_latlng([sg.to_local(48.8570, 2.3531)])
        assert lat == pytest.approx(48.8570, abs=1e-9)
        assert lng == pytest.approx(2.3531, abs=1e-9)

    def test_covers(self, cache_dir):
        sg = _loaded(cache_dir)
        assert sg.covers(REF_LAT, REF_LNG)
        assert not sg.covers(48.87, 2.3522)


@pytest.mark.unit
class TestCache:
    def test_second_load_uses_cache(self, cache_dir):
        calls = []

        def fetch(*args, **kwargs):
            calls.append(args)
            return _MOCK_WAYS

        with patch("navigation.tactical.street_graph._fetch_ways", side_effect=fetch):
            StreetGraph().load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir)
            sg = StreetGraph()
            assert sg.load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir)
        assert len(calls) == 1
        assert sg.graph.number_of_nodes() == 7

    def test_expired_cache_refetches(self, cache_dir):
        calls = []

        def fetch(*args, **kwargs):
            calls.append(args)
            return _MOCK_WAYS

        with patch("navigation.tactical.street_graph._fetch_ways", side_effect=fetch):
            StreetGraph().load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir)
            old = time.time() - 25 * 3600
            for f in Path(cache_dir).glob("*.pkl"):
                os.utime(f, (old, old))
            StreetGraph().load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir)
        assert len(calls) == 2


@pytest.mark.unit
class TestOffline:
    def test_fetch_failure_leaves_graph_unloaded(self, cache_dir):
        with patch(
            "navigation.tactical.street_graph._fetch_ways",
            side_effect=ConnectionError("Overpass unreachable"),
        ):
            sg = StreetGraph()
            assert sg.load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir) is False
        assert sg.graph is None
        assert sg.shortest_path((0, 0), (10, 10)) is None

    def test_empty_response(self, cache_dir):
        with patch("navigation.tactical.street_graph._fetch_ways", return_value=[]):
            sg = StreetGraph()
            assert sg.load(REF_LAT, REF_LNG, radius_m=300, cache_dir=cache_dir) is False
        assert sg.graph is None
