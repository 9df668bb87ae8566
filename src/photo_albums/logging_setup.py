"""Logging configuration driven by the ``logging`` config section."""

from __future__ import annotations

import logging

from photo_albums.config.config import ConfigManager

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: ConfigManager | None = None, verbose: bool = False) -> None:
    """Setup logging configuration."""
    config = config or ConfigManager()
    level_name = str(config.get("logging.level", "INFO")).upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.get("logging.log_to_file", False):
        handlers.append(
            logging.FileHandler(config.get("logging.log_file"), encoding="utf-8")
        )

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
        force=True,
    )
