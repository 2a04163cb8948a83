"""Logging utilities."""

import logging
from typing import Any, Optional


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def setup_logging_from_config(cfg: Optional[Any] = None) -> int:
    """Setup logging from the ``logging`` section of a loaded configuration.

    Args:
        cfg: Loaded configuration; the global configuration is used if None

    Returns:
        The numeric logging level that was applied
    """
    if cfg is None:
        from ida_planner.config import get_config
        cfg = get_config()

    level_name = 'INFO'
    format_string = None
    if cfg is not None and 'logging' in cfg:
        level_name = str(cfg.logging.get('level', 'INFO'))
        format_string = cfg.logging.get('format', None)

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    setup_logging(level, format_string)
    return level
