# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""GPX track loading for the fixed-track router.

Waypoints (``<wpt>``) are preferred.  Files exported as a route or a
recorded track carry ``<rtept>`` or ``<trkpt>`` instead, and those are
used when no waypoints exist.  Namespaced (GPX 1.0/1.1) and bare files
both parse.  Only xml.etree.ElementTree is needed.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from navigation.errors import TrackLoadError
from navigation.target import Target

_POINT_TAGS = ("wpt", "rtept", "trkpt")


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_gpx(xml_data: str | bytes) -> list[Target]:
    """Parse GPX text or raw file bytes into Targets.  Raises TrackLoadError if unusable."""
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as e:
        raise TrackLoadError(f"Invalid GPX file: {e}") from e
    if _local(root.tag) != "gpx":
        raise TrackLoadError(f"Invalid GPX file: root element is <{_local(root.tag)}>")

    by_kind: dict[str, list[ET.Element]] = {tag: [] for tag in _POINT_TAGS}
    for el in root.iter():
        kind = _local(el.tag)
        if kind in by_kind:
            by_kind[kind].append(el)

    for kind in _POINT_TAGS:
        elements = by_kind[kind]
        if not elements:
            continue
        points = []
        for i, el in enumerate(elements):
            try:
                lat = float(el.attrib["lat"])
                lng = float(el.attrib["lon"])
            except (KeyError, ValueError) as e:
                raise TrackLoadError(f"Invalid GPX {kind} #{i}: {e}") from e
            name = None
            for child in el:
                if _local(child.tag) == "name" and child.text:
                    name = child.text.strip()
                    break
            points.append(Target(id=name, lat=lat, lng=lng))
        return points

    raise TrackLoadError("GPX file has no waypoints")


def load_track(path: str | Path) -> list[Target]:
    """Read and parse a GPX file from disk."""
    if not path:
        raise TrackLoadError("GPX file not defined")
    p = Path(path)
    if not p.is_file():
        raise TrackLoadError(f"GPX file does not exist: {p}")
    try:
        # Bytes, so the parser honours the encoding the file declares
        data = p.read_bytes()
    except OSError as e:
        raise TrackLoadError(f"Cannot read GPX file {p}: {e}") from e
    return parse_gpx(data)
