# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Application settings, read from the environment and an optional .env file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "GeoWalker"

    # Navigation
    nav_router: str = "stops"
    nav_speed: float = 5.0              # km/h, 0 = never move
    nav_follow_roads: bool = True
    start_lat: float = 48.8456222
    start_lng: float = 2.3364526
    ball_threshold: int = 5             # human router resupplies below this

    # Collaborators
    directions_provider: str = "google"  # google | osm
    gmap_key: str = ""
    http_timeout: float = 10.0
    street_graph_radius: float = 1500.0
    geo_cache_dir: str = "~/.cache/geowalker"

    # Files
    data_dir: Path = Path("data")
    track_file: Optional[str] = None    # relative to data_dir
    save_position: bool = False

    # Driver
    tick_interval: float = 1.0
    max_tick_errors: int = 10

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "geowalker.log"  # inside data_dir, None disables


settings = Settings()
