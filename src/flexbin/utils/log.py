"""Logging setup for applications embedding flexbin.

flexbin modules log through named loggers under the ``flexbin`` namespace and
never configure handlers themselves.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging with the flexbin log format."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``flexbin`` namespace.

    Example:
        >>> get_logger("envelope.serializer").name
        'flexbin.envelope.serializer'
    """
    if name == "flexbin" or name.startswith("flexbin."):
        return logging.getLogger(name)
    return logging.getLogger(f"flexbin.{name}")
