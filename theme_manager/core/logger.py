from __future__ import annotations

import logging
import os
import sys

_ROOT_LOGGER = "theme_manager"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger(_ROOT_LOGGER)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
    level_name = os.environ.get("THEME_MANAGER_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package root, configuring output on first use."""
    _configure()
    return logging.getLogger(name)


def set_level(level: int) -> None:
    _configure()
    logging.getLogger(_ROOT_LOGGER).setLevel(level)
