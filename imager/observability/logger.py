"""Logging setup for the image repository.

All loggers live under the ``imager`` namespace. Only the namespace root owns
a handler; child loggers (``imager.repository`` etc.) propagate to it.
Library code writes DEBUG/INFO records about completed filesystem work;
failures are raised to the caller instead of being logged.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "imager"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_root(level: Optional[str]) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.propagate = False

    if level is not None:
        root.setLevel(level.upper())
    elif root.level == logging.NOTSET:
        root.setLevel(logging.INFO)

    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        root.addHandler(handler)

    return root


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``imager`` namespace.

    Args:
        name: Logger name; names outside the namespace are nested under it.
        level: Optional log level string (e.g. "DEBUG") applied to the
            namespace root. If omitted, keeps the existing level.

    Returns:
        Logger whose records end up on stderr.
    """

    root = _configure_root(level)
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["ROOT_LOGGER_NAME", "get_logger"]
