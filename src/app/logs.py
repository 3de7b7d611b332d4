# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""loguru sink setup: colored console plus a plain log file in data_dir."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from app.config import Settings

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {level: <7} {name}:{line} {message}"


def setup_logging(settings: Settings) -> Path | None:
    """Replace loguru's default sink.  Returns the log file path, if any."""
    level = settings.log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if not settings.log_file:
        return None
    log_path = Path(settings.data_dir) / settings.log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(log_path, level=level, format=FILE_FORMAT, colorize=False, rotation="10 MB")
    return log_path
