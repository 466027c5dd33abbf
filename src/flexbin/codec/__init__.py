"""Schema model and standard value encoding for flexbin.

This module provides the Schema/FieldType model and the self-delimiting binary
encoding used for both the schema and the payload of an envelope.
"""

from __future__ import annotations

from .buffer import ByteReader, ByteWriter
from .decoder import decode_schema, decode_value, read_schema, read_value
from .encoder import encode_schema, encode_value
from .limits import MAX_SCHEMA_DEPTH, MAX_ZERO_WIDTH_ITEMS
from .schema import (
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
)

__all__ = [
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
    "encode_schema",
    "encode_value",
    "decode_schema",
    "decode_value",
    "read_schema",
    "read_value",
    "ByteReader",
    "ByteWriter",
    "MAX_SCHEMA_DEPTH",
    "MAX_ZERO_WIDTH_ITEMS",
]
