"""Structural limits shared by the schema/value encoders and decoders.

Both directions enforce the same limits, so anything the encoder accepts
the decoder can read back.
"""

from __future__ import annotations

from .schema import (
    ArrayType,
    BooleanType,
    FieldType,
    FloatType,
    IntegerType,
    ObjectType,
    StringType,
)

#: Deepest Object/Array nesting a schema may have.
MAX_SCHEMA_DEPTH = 64

#: Total array items of zero encoded width (empty objects) allowed in one value.
MAX_ZERO_WIDTH_ITEMS = 1 << 16


def min_encoded_size(field_type: FieldType) -> int:
    """Smallest number of bytes a value of field_type can occupy.

    Objects are the sum of their fields, so an Object with no fields (or only
    such Objects) has a minimum size of zero.
    """
    if isinstance(field_type, (IntegerType, FloatType)):
        return 8
    if isinstance(field_type, (StringType, ArrayType)):
        return 4
    if isinstance(field_type, BooleanType):
        return 1
    if isinstance(field_type, ObjectType):
        return sum(min_encoded_size(inner) for _, inner in field_type.schema.fields)
    return 0


class ZeroWidthBudget:
    """Running allowance of zero-width array items for a single value.

    Array counts are normally bounded by the bytes that remain, but items that
    encode to nothing would let a 4-byte count expand without limit. One budget
    is shared by every array of a value.

    Args:
        error: Exception class raised when the allowance is exceeded
    """

    __slots__ = ("_error", "_left")

    def __init__(self, error: type[Exception]) -> None:
        self._error = error
        self._left = MAX_ZERO_WIDTH_ITEMS

    def take(self, count: int, path: str) -> None:
        """Consume count items, raising the configured error past the limit."""
        if count > self._left:
            raise self._error(
                f"Field {path}: more than {MAX_ZERO_WIDTH_ITEMS} zero-width array items"
            )
        self._left -= count
