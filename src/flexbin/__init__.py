"""flexbin: Self-describing binary envelopes

A Python library for bundling a value's schema, its binary payload, optional
compression and optional encryption/signing into a single byte blob, and for
recovering both schema and value from that blob without out-of-band type
knowledge.

Key Features:
- Structural schemas (Integer, Float, String, Boolean, Object, Array)
- Schema introspection from Pydantic models
- Self-delimiting big-endian value encoding
- zlib compression
- AES-256-GCM encryption with a fresh nonce per envelope
- HMAC-SHA256 signature trailer

Quick Start:
    >>> from flexbin import INTEGER, STRING, FlexBinDeserializer, FlexBinSerializer, Schema
    >>>
    >>> schema = Schema.new([("name", STRING), ("age", INTEGER)])
    >>> data = FlexBinSerializer(schema).serialize({"name": "Ada", "age": 30})
    >>> FlexBinDeserializer().deserialize(data)
    (Schema({name: String, age: Integer}), {'name': 'Ada', 'age': 30})
"""

from __future__ import annotations

from .codec import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    ArrayType,
    BooleanType,
    FieldType,
    FloatType,
    IntegerType,
    ObjectType,
    Schema,
    StringType,
    decode_schema,
    decode_value,
    encode_schema,
    encode_value,
)
from .compression import Compression, CompressionType, NoCompression, ZlibCompression
from .envelope import FlexBinDeserializer, FlexBinSerializer
from .exceptions import (
    CompressionError,
    CompressionFailed,
    DecodeError,
    DecompressionFailed,
    DecryptionFailed,
    DeserializeError,
    EncodeError,
    EncryptionFailed,
    EncryptionKeyMissing,
    EnvelopeError,
    FlexBinError,
    SchemaError,
    SecurityError,
    SerializationError,
    SerializeError,
    SigningFailed,
    SigningKeyMissing,
    VerificationFailed,
)
from .security import SecurityOptions, decrypt, encrypt, sign, verify
from .utils import encoded_size, envelope_overhead, setup_logging

__version__ = "0.1.0"

__all__ = [
    # Core API
    "FlexBinSerializer",
    "FlexBinDeserializer",
    "SecurityOptions",
    "CompressionType",
    # Schema model
    "Schema",
    "FieldType",
    "IntegerType",
    "FloatType",
    "StringType",
    "BooleanType",
    "ObjectType",
    "ArrayType",
    "INTEGER",
    "FLOAT",
    "STRING",
    "BOOLEAN",
    # Value encoding
    "encode_schema",
    "encode_value",
    "decode_schema",
    "decode_value",
    # Compression
    "Compression",
    "NoCompression",
    "ZlibCompression",
    # Security service
    "encrypt",
    "decrypt",
    "sign",
    "verify",
    # Exceptions
    "FlexBinError",
    "SchemaError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
    "CompressionError",
    "CompressionFailed",
    "DecompressionFailed",
    "SecurityError",
    "EncryptionKeyMissing",
    "SigningKeyMissing",
    "EncryptionFailed",
    "DecryptionFailed",
    "SigningFailed",
    "VerificationFailed",
    "EnvelopeError",
    "SerializeError",
    "DeserializeError",
    # Utilities
    "encoded_size",
    "envelope_overhead",
    "setup_logging",
    # Version
    "__version__",
]
