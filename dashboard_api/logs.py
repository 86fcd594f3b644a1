"""
Logging for the invoice dashboard.

Every module logs under the ``dashboard_api`` logger, which owns the one
stream handler and the level; module loggers inherit both. The level
starts from LOG_LEVEL (with .env loaded first) and create_app reapplies
``Settings.log_level`` once the settings are read.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

PACKAGE = "dashboard_api"


def _parse_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE)
    if not root.handlers:
        load_dotenv()
        root.setLevel(_parse_level(os.getenv("LOG_LEVEL", "INFO")))
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root.addHandler(handler)
    return root


def logger(name: str) -> logging.Logger:
    """
    Logger for a module of the dashboard.

    Takes ``__name__`` or ``__file__``; names outside the package (scripts,
    ``__main__``) are filed under it so they share the handler and level.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem
    if name != PACKAGE and not name.startswith(PACKAGE + "."):
        name = f"{PACKAGE}.{name}"

    _package_logger()
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Apply a level name such as ``Settings.log_level`` to every dashboard logger"""
    _package_logger().setLevel(_parse_level(level))
