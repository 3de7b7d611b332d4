# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Command line entry point: walk a world snapshot from a JSON file.

Usage:
    geowalker --world data/map.json --router human --ticks 600
    geowalker --router track --track loop.gpx --no-follow-roads
    geowalker --world data/map.json --goto 48.8584,2.2945

Settings come from the environment / .env first; flags override them.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from loguru import logger

from app.config import Settings
from app.logs import setup_logging
from navigation.driver import PositionStore, TickDriver
from navigation.errors import SnapshotError
from navigation.navigator import Navigator
from navigation.routers import router_names
from navigation.world import WorldSnapshot


def _latlng(value: str) -> tuple[float, float]:
    try:
        lat, lng = (float(v) for v in value.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LAT,LNG, got '{value}'")
    return (lat, lng)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="geowalker", description="Walk an avatar around a world snapshot.")
    parser.add_argument("--router", choices=router_names(), help="target selection strategy")
    parser.add_argument("--speed", type=float, help="walking speed in km/h")
    parser.add_argument("--lat", type=float, help="start latitude")
    parser.add_argument("--lng", type=float, help="start longitude")
    parser.add_argument("--world", type=Path, help="JSON world snapshot file")
    parser.add_argument("--track", help="GPX file for the track router")
    parser.add_argument("--no-follow-roads", action="store_true", help="walk in straight lines")
    parser.add_argument("--goto", type=_latlng, metavar="LAT,LNG", help="detour to a point first")
    parser.add_argument("--ticks", type=int, help="stop after this many ticks")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING...")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "nav_router": args.router,
        "nav_speed": args.speed,
        "start_lat": args.lat,
        "start_lng": args.lng,
        "track_file": args.track,
        "log_level": args.log_level,
    }
    if args.no_follow_roads:
        overrides["nav_follow_roads"] = False
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def load_world(path: Path) -> WorldSnapshot:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise SnapshotError(f"Cannot read world snapshot {path}: {e}") from e
    return WorldSnapshot.from_dict(data)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    setup_logging(settings)
    logger.info(f"{settings.app_name} starting with router '{settings.nav_router}'")

    try:
        world = load_world(args.world) if args.world else None
    except SnapshotError as e:
        logger.error(str(e))
        return 2

    nav = Navigator.from_settings(settings)
    if settings.save_position and args.lat is None and args.lng is None:
        saved = PositionStore(Path(settings.data_dir) / "position.json").load()
        if saved is not None:
            logger.info(f"Resuming from saved position {saved.lat:.6f},{saved.lng:.6f}")
            nav.position = saved
    nav.update_world(world)
    if args.goto:
        nav.go_to(*args.goto, target_id="goto")

    driver = TickDriver.from_settings(nav)
    try:
        driver.run(ticks=args.ticks)
    except KeyboardInterrupt:
        logger.info("Interrupted")

    pos = nav.position
    logger.info(f"Stopped after {driver.ticks} ticks at {pos.lat:.6f},{pos.lng:.6f}")
    return 1 if driver.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
