"""Unit tests for geo math: distances, point normalization, projections."""

from __future__ import annotations

import math
from types import SimpleNamespace

import pytest

from navigation.tactical.geo import (
    distance,
    latlng_of,
    latlng_to_local,
    local_to_latlng,
    offset,
)
from navigation.target import Position, Target

pytestmark = pytest.mark.unit

PARIS = (48.8566, 2.3522)
LONDON = (51.5074, -0.1278)


class TestLatLngOf:
    def test_tuple(self):
        assert latlng_of((1.5, 2.5)) == (1.5, 2.5)

    def test_target_and_position(self):
        assert latlng_of(Target(id="a", lat=1.0, lng=2.0)) == (1.0, 2.0)
        assert latlng_of(Position(lat=3.0, lng=4.0)) == (3.0, 4.0)

    def test_dict_short_keys(self):
        assert latlng_of({"lat": 1.0, "lng": 2.0}) == (1.0, 2.0)

    def test_dict_lon_key(self):
        assert latlng_of({"lat": 1.0, "lon": 2.0}) == (1.0, 2.0)

    def test_dict_long_keys(self):
        assert latlng_of({"latitude": 1.0, "longitude": 2.0}) == (1.0, 2.0)

    def test_nested_coords_dict(self):
        assert latlng_of({"id": "x", "coords": {"latitude": 5.0, "longitude": 6.0}}) == (5.0, 6.0)

    def test_nested_coords_object(self):
        obj = SimpleNamespace(id="x", coords=SimpleNamespace(latitude=5.0, longitude=6.0))
        assert latlng_of(obj) == (5.0, 6.0)

    def test_zero_coordinates_are_valid(self):
        assert latlng_of({"lat": 0.0, "lng": 0.0}) == (0.0, 0.0)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            latlng_of({"name": "nowhere"})

    def test_short_sequence_raises(self):
        with pytest.raises(ValueError):
            latlng_of((1.0,))


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance(PARIS, PARIS) == 0.0

    def test_symmetric(self):
        assert distance(PARIS, LONDON) == distance(LONDON, PARIS)

    def test_paris_london(self):
        # Roughly 344 km great-circle
        assert 340_000 < distance(PARIS, LONDON) < 348_000

    def test_one_degree_latitude(self):
        d = distance((0.0, 0.0), (1.0, 0.0))
        assert d == pytest.approx(111_319.5, rel=1e-3)

    def test_mixed_point_shapes(self):
        a = Target(id="a", lat=PARIS[0], lng=PARIS[1])
        b = {"coords": {"latitude": LONDON[0], "longitude": LONDON[1]}}
        assert distance(a, b) == distance(PARIS, LONDON)

    def test_deterministic(self):
        assert distance(PARIS, LONDON) == distance(PARIS, LONDON)


class TestProjections:
    def test_round_trip(self):
        x, y = latlng_to_local(48.86, 2.36, *PARIS)
        lat, lng = local_to_latlng(x, y, *PARIS)
        assert lat == pytest.approx(48.86, abs=1e-9)
        assert lng == pytest.approx(2.36, abs=1e-9)

    def test_north_is_positive_y(self):
        x, y = latlng_to_local(PARIS[0] + 0.001, PARIS[1], *PARIS)
        assert y > 0
        assert x == pytest.approx(0.0)

    def test_offset_matches_distance(self):
        for north, east in [(50, 0), (0, 80), (30, 40)]:
            p = offset(PARIS, north, east)
            assert distance(PARIS, p) == pytest.approx(math.hypot(north, east), rel=5e-3)
