"""Exception hierarchy for flexbin.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from FlexBinError for easy catching of any flexbin-specific error.

The pipeline raises three families of errors (serialization, compression and
security). The envelope layer wraps whichever one occurred into a single error
per direction (SerializeError / DeserializeError) while keeping the original
exception available as ``cause``.
"""

from __future__ import annotations


class FlexBinError(Exception):
    """Base exception for all flexbin errors."""

    pass


class SchemaError(FlexBinError):
    """Raised when a schema is invalid, unsupported or garbled.

    Examples:
        - Unknown field type tag in an encoded schema
        - Schema nesting deeper than the supported limit
        - Pydantic model with an annotation that has no FieldType
    """

    pass


# ---------------------------------------------------------------------------
# Serialization layer
# ---------------------------------------------------------------------------


class SerializationError(FlexBinError):
    """Base class for value/schema encoding and decoding failures."""

    pass


class EncodeError(SerializationError):
    """Raised when encoding a value fails.

    Examples:
        - Field type mismatch (str given for an Integer field)
        - Missing or unexpected object field
        - Integer outside the signed 64-bit range
    """

    pass


class DecodeError(SerializationError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid UTF-8 or boolean byte
        - Trailing bytes after the payload
        - Decoded value does not validate into the requested model
    """

    pass


# ---------------------------------------------------------------------------
# Compression layer
# ---------------------------------------------------------------------------


class CompressionError(FlexBinError):
    """Base class for compression failures."""

    pass


class CompressionFailed(CompressionError):
    """Raised when the compressor rejects its input."""

    pass


class DecompressionFailed(CompressionError):
    """Raised on malformed or truncated compressed data."""

    pass


# ---------------------------------------------------------------------------
# Security layer
# ---------------------------------------------------------------------------


class SecurityError(FlexBinError):
    """Base class for encryption and signing failures."""

    pass


class EncryptionKeyMissing(SecurityError):
    """Raised when encryption is enabled but no key was supplied."""

    pass


class SigningKeyMissing(SecurityError):
    """Raised when signing is enabled but no key was supplied."""

    pass


class EncryptionFailed(SecurityError):
    """Raised when the key is unusable for the cipher or encryption fails."""

    pass


class DecryptionFailed(SecurityError):
    """Raised on authentication failure, malformed ciphertext or a bad key."""

    pass


class SigningFailed(SecurityError):
    """Raised when the signing backend fails."""

    pass


class VerificationFailed(SecurityError):
    """Raised when a signature cannot be checked or does not match."""

    pass


# ---------------------------------------------------------------------------
# Envelope layer
# ---------------------------------------------------------------------------


class EnvelopeError(FlexBinError):
    """Base class for envelope pipeline failures.

    Attributes:
        cause: The originating flexbin error (never None)
    """

    def __init__(self, cause: FlexBinError) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause


class SerializeError(EnvelopeError):
    """Raised by FlexBinSerializer.serialize()."""

    pass


class DeserializeError(EnvelopeError):
    """Raised by FlexBinDeserializer.deserialize()."""

    pass
