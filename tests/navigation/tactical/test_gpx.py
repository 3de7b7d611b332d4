"""Unit tests for GPX parsing and track file loading."""

from __future__ import annotations

import pytest

from navigation.errors import TrackLoadError
from navigation.tactical.gpx import load_track, parse_gpx

pytestmark = pytest.mark.unit

GPX_WPT = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <wpt lat="48.8566" lon="2.3522"><name>start</name></wpt>
  <wpt lat="48.8570" lon="2.3530"></wpt>
  <wpt lat="48.8580" lon="2.3540"><name> corner </name></wpt>
  <trk><trkseg><trkpt lat="1.0" lon="1.0"/></trkseg></trk>
</gpx>
"""

GPX_TRACK_ONLY = """<gpx version="1.0">
  <trk><trkseg>
    <trkpt lat="10.0" lon="20.0"/>
    <trkpt lat="10.1" lon="20.1"/>
  </trkseg></trk>
</gpx>
"""

GPX_ROUTE = """<gpx xmlns="http://www.topografix.com/GPX/1/0">
  <rte><rtept lat="5.0" lon="6.0"/><rtept lat="5.5" lon="6.5"/></rte>
  <trk><trkseg><trkpt lat="1.0" lon="1.0"/></trkseg></trk>
</gpx>
"""


class TestParseGpx:
    def test_waypoints_preferred(self):
        points = parse_gpx(GPX_WPT)
        assert [(p.lat, p.lng) for p in points] == [
            (48.8566, 2.3522),
            (48.8570, 2.3530),
            (48.8580, 2.3540),
        ]

    def test_names_become_ids(self):
        assert [p.id for p in parse_gpx(GPX_WPT)] == ["start", None, "corner"]

    def test_track_points_without_namespace(self):
        points = parse_gpx(GPX_TRACK_ONLY)
        assert [(p.lat, p.lng) for p in points] == [(10.0, 20.0), (10.1, 20.1)]

    def test_route_points_before_track_points(self):
        points = parse_gpx(GPX_ROUTE)
        assert [(p.lat, p.lng) for p in points] == [(5.0, 6.0), (5.5, 6.5)]

    def test_not_xml(self):
        with pytest.raises(TrackLoadError, match="Invalid GPX"):
            parse_gpx("this is not xml <")

    def test_wrong_root(self):
        with pytest.raises(TrackLoadError, match="root element"):
            parse_gpx("<kml><wpt lat='1' lon='2'/></kml>")

    def test_bad_coordinate(self):
        with pytest.raises(TrackLoadError):
            parse_gpx('<gpx><wpt lat="north" lon="2"/></gpx>')

    def test_missing_coordinate(self):
        with pytest.raises(TrackLoadError):
            parse_gpx('<gpx><wpt lat="1"/></gpx>')

    def test_no_points(self):
        with pytest.raises(TrackLoadError, match="no waypoints"):
            parse_gpx("<gpx></gpx>")


class TestLoadTrack:
    def test_reads_file(self, tmp_path):
        f = tmp_path / "loop.gpx"
        f.write_text(GPX_WPT, encoding="utf-8")
        assert len(load_track(f)) == 3

    def test_accepts_str_path(self, tmp_path):
        f = tmp_path / "loop.gpx"
        f.write_text(GPX_TRACK_ONLY, encoding="utf-8")
        assert len(load_track(str(f))) == 2

    def test_declared_latin1_encoding(self, tmp_path):
        f = tmp_path / "latin1.gpx"
        f.write_bytes(
            '<?xml version="1.0" encoding="ISO-8859-1"?>\n'
            '<gpx><wpt lat="48.8566" lon="2.3522"><name>Café</name></wpt></gpx>'
            .encode("latin-1")
        )
        points = load_track(f)
        assert points[0].id == "Café"
        assert (points[0].lat, points[0].lng) == (48.8566, 2.3522)

    def test_utf8_with_bom(self, tmp_path):
        f = tmp_path / "bom.gpx"
        f.write_bytes(b"\xef\xbb\xbf" + '<gpx><wpt lat="1" lon="2"><name>Crêpe</name></wpt></gpx>'.encode("utf-8"))
        assert load_track(f)[0].id == "Crêpe"

    def test_bytes_in_wrong_encoding(self, tmp_path):
        f = tmp_path / "broken.gpx"
        f.write_bytes(b'<?xml version="1.0" encoding="UTF-8"?><gpx><wpt lat="1" lon="2"><name>\xe9</name></wpt></gpx>')
        with pytest.raises(TrackLoadError):
            load_track(f)

    def test_empty_path(self):
        with pytest.raises(TrackLoadError, match="not defined"):
            load_track("")

    def test_missing_file(self, tmp_path):
        with pytest.raises(TrackLoadError, match="does not exist"):
            load_track(tmp_path / "nope.gpx")
