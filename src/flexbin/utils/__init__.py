"""Utility functions for flexbin.

This module provides logging setup and envelope size calculation.
"""

from __future__ import annotations

from .log import get_logger, setup_logging
from .sizing import encoded_size, envelope_overhead

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Sizing
    "encoded_size",
    "envelope_overhead",
]
