"""Stateless keyed operations: authenticated encryption and message signing.

- AES-256-GCM for confidentiality and integrity of the envelope body
- HMAC-SHA256 for the optional signature trailer

Every encryption draws a fresh random 96-bit nonce, stored in front of the
ciphertext: ``nonce (12) ++ ciphertext ++ GCM tag (16)``.
"""

from __future__ import annotations

import os
from typing import Optional

from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..exceptions import (
    DecryptionFailed,
    EncryptionFailed,
    EncryptionKeyMissing,
    SigningFailed,
    SigningKeyMissing,
    VerificationFailed,
)
from .options import KEY_SIZE

NONCE_SIZE = 12
GCM_TAG_SIZE = 16
SIGNATURE_SIZE = 32


def encrypt(data: bytes, key: Optional[bytes]) -> bytes:
    """Encrypt data with AES-256-GCM under a fresh random nonce.

    Args:
        data: Plaintext
        key: 32-byte key

    Returns:
        nonce ++ ciphertext ++ tag

    Raises:
        EncryptionKeyMissing: If key is None or empty
        EncryptionFailed: If key is not 32 bytes or the cipher fails
    """
    if not key:
        raise EncryptionKeyMissing("Encryption key missing")
    if len(key) != KEY_SIZE:
        raise EncryptionFailed(f"Encryption key must be {KEY_SIZE} bytes, got {len(key)}")

    nonce = os.urandom(NONCE_SIZE)
    try:
        ciphertext = AESGCM(bytes(key)).encrypt(nonce, bytes(data), None)
    except (ValueError, OverflowError) as e:
        raise EncryptionFailed(f"Encryption failed: {e}") from e
    return nonce + ciphertext


def decrypt(data: bytes, key: Optional[bytes]) -> bytes:
    """Authenticate and decrypt the output of encrypt().

    Args:
        data: nonce ++ ciphertext ++ tag
        key: 32-byte key

    Returns:
        Plaintext

    Raises:
        DecryptionFailed: On a missing or malformed key, short input, or any
            authentication failure (wrong key, tampered bytes)
    """
    if not key:
        raise DecryptionFailed("Decryption key missing")
    if len(key) != KEY_SIZE:
        raise DecryptionFailed(f"Decryption key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(data) < NONCE_SIZE + GCM_TAG_SIZE:
        raise DecryptionFailed(
            f"Ciphertext too short: need at least {NONCE_SIZE + GCM_TAG_SIZE} bytes, "
            f"got {len(data)}"
        )

    nonce, ciphertext = bytes(data[:NONCE_SIZE]), bytes(data[NONCE_SIZE:])
    try:
        return AESGCM(bytes(key)).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise DecryptionFailed("Decryption failed: authentication tag mismatch") from e


def _mac(key: bytes) -> hmac.HMAC:
    return hmac.HMAC(bytes(key), hashes.SHA256())


def sign(data: bytes, key: Optional[bytes]) -> bytes:
    """Compute an HMAC-SHA256 tag over data.

    Raises:
        SigningKeyMissing: If key is None or empty
        SigningFailed: If the HMAC backend rejects the input
    """
    if not key:
        raise SigningKeyMissing("Signing key missing")
    try:
        mac = _mac(key)
        mac.update(bytes(data))
        return mac.finalize()
    except (TypeError, ValueError) as e:
        raise SigningFailed(f"Signing failed: {e}") from e


def verify(data: bytes, tag: bytes, key: Optional[bytes]) -> bool:
    """Check an HMAC-SHA256 tag in constant time.

    Returns:
        True if the tag matches, False otherwise

    Raises:
        VerificationFailed: If key is None or empty
    """
    if not key:
        raise VerificationFailed("Verification key missing")
    mac = _mac(key)
    mac.update(bytes(data))
    try:
        mac.verify(bytes(tag))
    except InvalidSignature:
        return False
    return True
