"""Standard value encoding: schema and value decoders.

read_schema() and read_value() consume exactly one encoded block from a shared
ByteReader, leaving the cursor at the start of the next block. decode_schema()
and decode_value() are whole-buffer conveniences that reject trailing bytes.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import DecodeError, SchemaError
from .buffer import ByteReader
from .limits import MAX_SCHEMA_DEPTH, ZeroWidthBudget, min_encoded_size
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

_SCALAR_TAGS = {
    IntegerType.tag: INTEGER,
    FloatType.tag: FLOAT,
    StringType.tag: STRING,
    BooleanType.tag: BOOLEAN,
}


def read_schema(reader: ByteReader) -> Schema:
    """Decode one Schema from the reader's current position.

    Args:
        reader: Cursor over the encoded bytes

    Returns:
        Decoded Schema

    Raises:
        SchemaError: If a type tag is unknown or nesting is too deep
        DecodeError: If the data is truncated or a field name is not UTF-8
    """
    try:
        return _read_schema(reader, depth=0)
    except IndexError as e:
        raise DecodeError(f"Truncated data while decoding schema: {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid UTF-8 in schema field name: {e}") from e


def _read_schema(reader: ByteReader, depth: int) -> Schema:
    if depth > MAX_SCHEMA_DEPTH:
        raise SchemaError(f"Schema nesting exceeds {MAX_SCHEMA_DEPTH} levels")

    count = reader.read_u32()
    # Each field needs at least a 4-byte name length and a 1-byte tag
    if count * 5 > reader.remaining():
        raise DecodeError(
            f"Truncated data while decoding schema: {count} fields declared, "
            f"{reader.remaining()} bytes left"
        )

    fields = []
    for _ in range(count):
        name = reader.read_str()
        fields.append((name, _read_field_type(reader, depth)))
    return Schema(tuple(fields))


def _read_field_type(reader: ByteReader, depth: int) -> FieldType:
    tag = reader.read_u8()
    scalar = _SCALAR_TAGS.get(tag)
    if scalar is not None:
        return scalar
    if tag == ObjectType.tag:
        return ObjectType(_read_schema(reader, depth + 1))
    if tag == ArrayType.tag:
        if depth + 1 > MAX_SCHEMA_DEPTH:
            raise SchemaError(f"Schema nesting exceeds {MAX_SCHEMA_DEPTH} levels")
        return ArrayType(_read_field_type(reader, depth + 1))
    raise SchemaError(f"Unknown field type tag {tag}")


def read_value(schema: Schema, reader: ByteReader) -> dict[str, Any]:
    """Decode one object value described by schema from the reader.

    Args:
        schema: Schema of the encoded value
        reader: Cursor positioned at the start of the value

    Returns:
        Plain dict (nested dicts for Object fields, lists for Array fields)

    Raises:
        DecodeError: If data is truncated or contains invalid bytes
    """
    try:
        return _read_object(reader, schema, "", ZeroWidthBudget(DecodeError))
    except IndexError as e:
        raise DecodeError(f"Truncated data while decoding value: {e}") from e


def _read_object(
    reader: ByteReader, schema: Schema, path: str, budget: ZeroWidthBudget
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for name, field_type in schema.fields:
        field_path = f"{path}.{name}" if path else name
        result[name] = _read_field(reader, field_type, field_path, budget)
    return result


def _read_field(
    reader: ByteReader, field_type: FieldType, path: str, budget: ZeroWidthBudget
) -> Any:
    if isinstance(field_type, BooleanType):
        try:
            return reader.read_bool()
        except ValueError as e:
            raise DecodeError(f"Field {path}: {e}") from e

    if isinstance(field_type, IntegerType):
        return reader.read_i64()

    if isinstance(field_type, FloatType):
        return reader.read_f64()

    if isinstance(field_type, StringType):
        try:
            return reader.read_str()
        except UnicodeDecodeError as e:
            raise DecodeError(f"Field {path}: invalid UTF-8 encoding: {e}") from e

    if isinstance(field_type, ObjectType):
        return _read_object(reader, field_type.schema, path, budget)

    if isinstance(field_type, ArrayType):
        count = reader.read_u32()
        min_size = min_encoded_size(field_type.element)
        if min_size == 0:
            budget.take(count, path)
        if count * min_size > reader.remaining():
            raise DecodeError(
                f"Truncated data while decoding field {path}: {count} items declared, "
                f"{reader.remaining()} bytes left"
            )
        return [
            _read_field(reader, field_type.element, f"{path}[{index}]", budget)
            for index in range(count)
        ]

    raise DecodeError(f"Field {path}: unsupported type {field_type!r}")


def decode_schema(data: bytes) -> Schema:
    """Decode a buffer holding exactly one encoded Schema."""
    reader = ByteReader(data)
    schema = read_schema(reader)
    _ensure_consumed(reader, "schema")
    return schema


def decode_value(schema: Schema, data: bytes) -> dict[str, Any]:
    """Decode a buffer holding exactly one encoded value."""
    reader = ByteReader(data)
    value = read_value(schema, reader)
    _ensure_consumed(reader, "value")
    return value


def _ensure_consumed(reader: ByteReader, what: str) -> None:
    if reader.remaining():
        raise DecodeError(f"{reader.remaining()} trailing bytes after {what}")
