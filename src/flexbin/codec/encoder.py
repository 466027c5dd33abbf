"""Standard value encoding: schema and value encoders.

This module provides encode_schema() and encode_value(). Both produce
self-delimiting big-endian bytes so they can be concatenated without framing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from ..exceptions import EncodeError, SchemaError
from .buffer import I64_MAX, I64_MIN, U32_MAX, ByteWriter
from .limits import MAX_SCHEMA_DEPTH, ZeroWidthBudget, min_encoded_size
from .schema import (
    ArrayType,
    BooleanType,
    FieldType,
    FloatType,
    IntegerType,
    ObjectType,
    Schema,
    StringType,
)

_FIELD_TYPES = (IntegerType, FloatType, StringType, BooleanType, ObjectType, ArrayType)


def encode_schema(schema: Schema) -> bytes:
    """Encode a Schema to its binary form.

    Layout: u32 field count, then for each field its name (length-prefixed
    UTF-8) followed by the FieldType as a tagged union.

    Args:
        schema: Schema to encode

    Returns:
        Encoded schema bytes

    Raises:
        SchemaError: If the schema is not a Schema instance or is nested
            deeper than MAX_SCHEMA_DEPTH
        EncodeError: If the schema has too many fields
    """
    if not isinstance(schema, Schema):
        raise SchemaError(f"Expected a Schema, got {type(schema).__name__}")

    writer = ByteWriter()
    _write_schema(writer, schema, depth=0)
    return writer.to_bytes()


def _write_schema(writer: ByteWriter, schema: Schema, depth: int) -> None:
    if depth > MAX_SCHEMA_DEPTH:
        raise SchemaError(f"Schema nesting exceeds {MAX_SCHEMA_DEPTH} levels")
    if len(schema.fields) > U32_MAX:
        raise EncodeError(f"Schema has too many fields: {len(schema.fields)}")
    writer.write_u32(len(schema.fields))
    for name, field_type in schema.fields:
        try:
            writer.write_str(name)
        except UnicodeEncodeError as e:
            raise SchemaError(f"Field name {name!r} is not encodable as UTF-8") from e
        _write_field_type(writer, field_type, depth)


def _write_field_type(writer: ByteWriter, field_type: FieldType, depth: int) -> None:
    if not isinstance(field_type, _FIELD_TYPES):
        raise SchemaError(f"Unsupported field type {field_type!r}")
    writer.write_u8(field_type.tag)
    if isinstance(field_type, ObjectType):
        _write_schema(writer, field_type.schema, depth + 1)
    elif isinstance(field_type, ArrayType):
        if depth + 1 > MAX_SCHEMA_DEPTH:
            raise SchemaError(f"Schema nesting exceeds {MAX_SCHEMA_DEPTH} levels")
        _write_field_type(writer, field_type.element, depth + 1)


def encode_value(schema: Schema, value: Any) -> bytes:
    """Encode an object value according to a Schema.

    Fields are written in schema order without names, so the value must
    supply exactly the schema's fields.

    Args:
        schema: Schema describing the value
        value: Mapping or Pydantic model instance

    Returns:
        Encoded value bytes

    Raises:
        EncodeError: If the value does not match the schema or holds more
            than MAX_ZERO_WIDTH_ITEMS empty-object array items

    Example:
        >>> schema = Schema.new([("name", STRING), ("age", INTEGER)])
        >>> data = encode_value(schema, {"name": "Ada", "age": 30})
    """
    writer = ByteWriter()
    _write_object(writer, schema, value, "", ZeroWidthBudget(EncodeError))
    return writer.to_bytes()


def _as_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Mapping):
        return value
    raise EncodeError(f"{path or '<root>'}: expected object, got {type(value).__name__}")


def _write_object(
    writer: ByteWriter, schema: Schema, value: Any, path: str, budget: ZeroWidthBudget
) -> None:
    mapping = _as_mapping(value, path)

    expected = set(schema.field_names())
    extra = [key for key in mapping if key not in expected]
    if extra:
        raise EncodeError(f"{path or '<root>'}: unexpected fields {sorted(map(str, extra))}")

    for name, field_type in schema.fields:
        field_path = f"{path}.{name}" if path else name
        if name not in mapping:
            raise EncodeError(f"Field {field_path} is required but missing")
        _write_field(writer, field_type, mapping[name], field_path, budget)


def _write_field(
    writer: ByteWriter, field_type: FieldType, value: Any, path: str, budget: ZeroWidthBudget
) -> None:
    # Boolean
    if isinstance(field_type, BooleanType):
        if not isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected bool, got {type(value).__name__}")
        writer.write_bool(value)
        return

    # Integer (bool is an int subclass but not an Integer)
    if isinstance(field_type, IntegerType):
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"Field {path}: expected int, got {type(value).__name__}")
        if value < I64_MIN or value > I64_MAX:
            raise EncodeError(
                f"Field {path}: value {value} out of bounds [{I64_MIN}, {I64_MAX}]"
            )
        writer.write_i64(value)
        return

    # Float
    if isinstance(field_type, FloatType):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"Field {path}: expected float, got {type(value).__name__}")
        try:
            as_float = float(value)
        except OverflowError as e:
            raise EncodeError(f"Field {path}: {value} does not fit in a double") from e
        writer.write_f64(as_float)
        return

    # String
    if isinstance(field_type, StringType):
        if not isinstance(value, str):
            raise EncodeError(f"Field {path}: expected str, got {type(value).__name__}")
        try:
            encoded = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"Field {path}: not encodable as UTF-8: {e}") from e
        if len(encoded) > U32_MAX:
            raise EncodeError(f"Field {path}: string too long ({len(encoded)} bytes)")
        writer.write_bytes(encoded)
        return

    # Object
    if isinstance(field_type, ObjectType):
        _write_object(writer, field_type.schema, value, path, budget)
        return

    # Array
    if isinstance(field_type, ArrayType):
        if not isinstance(value, (list, tuple)):
            raise EncodeError(f"Field {path}: expected list, got {type(value).__name__}")
        if len(value) > U32_MAX:
            raise EncodeError(f"Field {path}: array too long ({len(value)} items)")
        if min_encoded_size(field_type.element) == 0:
            budget.take(len(value), path)
        writer.write_u32(len(value))
        for index, item in enumerate(value):
            _write_field(writer, field_type.element, item, f"{path}[{index}]", budget)
        return

    raise EncodeError(f"Field {path}: unsupported type {field_type!r}")
