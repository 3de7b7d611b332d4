# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Root conftest -- shared navigation fixtures, skip network tests by default."""

import os
import random

import pytest

from app.config import Settings
from navigation.state import NavigationContext
from navigation.tactical.geo import offset
from navigation.target import Position

# Paris, Hotel de Ville
ORIGIN = (48.8566, 2.3522)

_NETWORK_OK = os.environ.get("GEOWALKER_NETWORK_TESTS") == "1"


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "network" in item.keywords and not _NETWORK_OK:
            item.add_marker(pytest.mark.skip(reason="set GEOWALKER_NETWORK_TESTS=1"))


@pytest.fixture
def at():
    """at(north_m, east_m) -> (lat, lng) relative to ORIGIN."""
    def _at(north_m: float = 0.0, east_m: float = 0.0) -> tuple[float, float]:
        return offset(ORIGIN, north_m, east_m)
    return _at


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides) -> Settings:
        values = {
            "nav_follow_roads": False,
            "start_lat": ORIGIN[0],
            "start_lng": ORIGIN[1],
            "data_dir": tmp_path,
            "log_file": None,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def make_ctx(make_settings):
    def _make(**overrides) -> NavigationContext:
        return NavigationContext(
            settings=make_settings(**overrides),
            position=Position(lat=ORIGIN[0], lng=ORIGIN[1]),
        )
    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def rng():
    return random.Random(1234)
