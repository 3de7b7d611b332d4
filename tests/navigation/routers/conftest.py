"""Router fixtures: a world builder and a straight-line waypoint generator."""

import pytest

from navigation.waypoints import WaypointGenerator
from navigation.world import Building, Chest, Creature, InventoryItem, WorldSnapshot


@pytest.fixture
def waypoints():
    return WaypointGenerator(None, follow_roads=False)


@pytest.fixture
def stop(at):
    """stop(id, north_m, east_m, **flags) -> Building"""
    def _stop(id, north_m=0.0, east_m=0.0, **kwargs):
        lat, lng = at(north_m, east_m)
        return Building(id=id, lat=lat, lng=lng, **kwargs)
    return _stop


@pytest.fixture
def creature(at):
    def _creature(id, north_m=0.0, east_m=0.0):
        lat, lng = at(north_m, east_m)
        return Creature(id=id, lat=lat, lng=lng)
    return _creature


@pytest.fixture
def chest(at):
    def _chest(id, north_m=0.0, east_m=0.0, claimed=False):
        lat, lng = at(north_m, east_m)
        return Chest(id=id, lat=lat, lng=lng, claimed=claimed)
    return _chest


@pytest.fixture
def make_world():
    def _make(buildings=(), wild=(), radar=(), chests=(), balls=50):
        return WorldSnapshot(
            buildings=list(buildings),
            wild_creatures=list(wild),
            radar_creatures=list(radar),
            chests=list(chests),
            inventory=[InventoryItem("MAGIC_BALL_SIMPLE", balls)],
        )
    return _make
