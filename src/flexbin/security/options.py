"""Caller-owned security configuration.

Keys are opaque 256-bit values. flexbin neither generates nor rotates them;
enabling a feature without its key is accepted here and fails at call time.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

KEY_SIZE = 32


class SecurityOptions(BaseModel):
    """Encryption and signing switches plus their keys.

    Attributes:
        enable_encryption: Wrap the envelope with AES-256-GCM
        enable_signing: Append an HMAC-SHA256 tag to the envelope
        encryption_key: 32-byte AES key (required when encryption is enabled)
        signing_key: 32-byte HMAC key (required when signing is enabled)

    Example:
        >>> import os
        >>> options = SecurityOptions(enable_encryption=True, encryption_key=os.urandom(32))
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    enable_encryption: bool = False
    enable_signing: bool = False
    encryption_key: Optional[bytes] = Field(
        default=None, min_length=KEY_SIZE, max_length=KEY_SIZE, repr=False
    )
    signing_key: Optional[bytes] = Field(
        default=None, min_length=KEY_SIZE, max_length=KEY_SIZE, repr=False
    )
