"""Signature trailer framing.

The frame structure is:
- [Payload] [HMAC-SHA256 tag (32 bytes)]

The tag is computed over the payload exactly as it goes on the wire, so when
encryption is enabled the trailer authenticates the ciphertext
(encrypt-then-MAC).
"""

from __future__ import annotations

from typing import Optional

from ..exceptions import SigningKeyMissing, VerificationFailed
from ..security.service import SIGNATURE_SIZE, sign, verify


def frame_signed(payload: bytes, key: Optional[bytes]) -> bytes:
    """Append an HMAC-SHA256 tag to payload.

    Raises:
        SigningKeyMissing: If key is None or empty
        SigningFailed: If the HMAC backend fails

    Example:
        >>> framed = frame_signed(b"Hello", key)
        >>> len(framed) == 5 + SIGNATURE_SIZE
        True
    """
    return bytes(payload) + sign(payload, key)


def unframe_signed(framed: bytes, key: Optional[bytes]) -> bytes:
    """Verify and strip the signature trailer.

    Returns:
        Original payload (without the tag)

    Raises:
        SigningKeyMissing: If key is None or empty
        VerificationFailed: If the frame is too short or the tag does not match
    """
    if not key:
        raise SigningKeyMissing("Signing key missing")
    if len(framed) < SIGNATURE_SIZE:
        raise VerificationFailed(
            f"Frame too short for signature: need at least {SIGNATURE_SIZE} bytes, "
            f"got {len(framed)} bytes"
        )

    payload_end = len(framed) - SIGNATURE_SIZE
    payload, tag = framed[:payload_end], framed[payload_end:]
    if not verify(payload, tag, key):
        raise VerificationFailed("Signature verification failed")
    return bytes(payload)
