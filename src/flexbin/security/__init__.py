"""Security options and keyed operations for flexbin envelopes."""

from __future__ import annotations

from .options import KEY_SIZE, SecurityOptions
from .service import (
    GCM_TAG_SIZE,
    NONCE_SIZE,
    SIGNATURE_SIZE,
    decrypt,
    encrypt,
    sign,
    verify,
)

__all__ = [
    "SecurityOptions",
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    "KEY_SIZE",
    "NONCE_SIZE",
    "GCM_TAG_SIZE",
    "SIGNATURE_SIZE",
]
