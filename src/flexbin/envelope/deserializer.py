"""Envelope deserializer.

This module provides FlexBinDeserializer, the mirror of FlexBinSerializer:

    [verify signature] -> [decrypt] -> decompress -> read schema -> read value

The schema is recovered from the envelope itself, so no type knowledge is
needed up front. The value is decoded by walking the recovered schema and
therefore always has that schema's shape.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from ..codec.buffer import ByteReader
from ..codec.decoder import read_schema, read_value
from ..codec.schema import Schema
from ..compression import Compression, CompressionSpec, CompressionType, resolve_compression
from ..exceptions import (
    DecodeError,
    DecryptionFailed,
    DeserializeError,
    FlexBinError,
    SchemaError,
    SigningKeyMissing,
    VerificationFailed,
)
from ..security import SecurityOptions, decrypt
from ..utils.log import get_logger
from .framing import unframe_signed

logger = get_logger("envelope.deserializer")


class FlexBinDeserializer:
    """Recovers (schema, value) pairs from envelopes.

    Compression and security settings must match the serializer that produced
    the envelope. Instances are immutable and safe to share across threads.

    Args:
        compression: CompressionType selector or a Compression instance
        security_options: Encryption/signing switches and keys

    Example:
        ```python
        deserializer = FlexBinDeserializer(CompressionType.ZLIB)
        schema, value = deserializer.deserialize(data)

        # Validate into a Pydantic model
        schema, person = deserializer.deserialize(data, model=Person)
        ```
    """

    def __init__(
        self,
        compression: CompressionSpec = CompressionType.NONE,
        security_options: Optional[SecurityOptions] = None,
    ) -> None:
        self._compression = resolve_compression(compression)
        self._security = security_options if security_options is not None else SecurityOptions()

    @property
    def compression(self) -> Compression:
        return self._compression

    @property
    def security_options(self) -> SecurityOptions:
        return self._security

    def deserialize(
        self,
        data: bytes,
        model: Optional[Type[BaseModel]] = None,
        expected_schema: Optional[Schema] = None,
    ) -> Tuple[Schema, Any]:
        """Deserialize an envelope.

        Args:
            data: Envelope bytes
            model: Optional Pydantic model class to validate the value into
            expected_schema: Optional schema the recovered schema must equal

        Returns:
            Tuple of (recovered Schema, value). The value is a plain dict
            unless model is given, in which case it is a model instance.

        Raises:
            DeserializeError: Wrapping the originating error in ``cause``:
                SigningKeyMissing, VerificationFailed, DecryptionFailed,
                DecompressionFailed, SchemaError or DecodeError
        """
        try:
            return self._deserialize(data, model, expected_schema)
        except FlexBinError as e:
            if isinstance(e, (VerificationFailed, DecryptionFailed)):
                logger.warning("envelope rejected: %s", e)
            else:
                logger.debug("deserialize failed: %s: %s", type(e).__name__, e)
            raise DeserializeError(e) from e

    def _deserialize(
        self,
        data: bytes,
        model: Optional[Type[BaseModel]],
        expected_schema: Optional[Schema],
    ) -> Tuple[Schema, Any]:
        body = bytes(data)

        if self._security.enable_signing:
            if self._security.signing_key is None:
                raise SigningKeyMissing("Signing enabled but no signing key supplied")
            body = unframe_signed(body, self._security.signing_key)

        if self._security.enable_encryption:
            if self._security.encryption_key is None:
                raise DecryptionFailed("Encryption enabled but no encryption key supplied")
            body = decrypt(body, self._security.encryption_key)
            logger.debug("decrypted envelope body to %d bytes", len(body))

        plain = self._compression.decompress(body)

        reader = ByteReader(plain)
        schema = read_schema(reader)
        schema_size = reader.position()
        if expected_schema is not None and schema != expected_schema:
            raise SchemaError(f"Schema mismatch: got {schema!r}, expected {expected_schema!r}")

        value = read_value(schema, reader)
        if reader.remaining():
            raise DecodeError(f"{reader.remaining()} trailing bytes after value")
        logger.debug(
            "decoded schema=%d value=%d from %d bytes",
            schema_size,
            reader.position() - schema_size,
            len(data),
        )

        if model is None:
            return schema, value

        try:
            return schema, model.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Failed to construct {model.__name__}: {e}") from e

    def __repr__(self) -> str:
        return (
            f"FlexBinDeserializer(compression={self._compression!r}, "
            f"encryption={self._security.enable_encryption}, "
            f"signing={self._security.enable_signing})"
        )
