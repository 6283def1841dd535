"""Console logging for the CLI and the server."""

from __future__ import annotations

import logging

_LOGGER_NAME = "png_color_changer"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.debug("logging configured at %s", level)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger under the package tree, e.g. get_logger("pipeline")."""
    if name:
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)
