"""Schema model for flexbin envelopes.

A Schema is an ordered sequence of (field name, FieldType) pairs. FieldType is a
closed, recursive variant: Integer, Float, String, Boolean, Object (a nested
Schema) and Array (exactly one element FieldType, homogeneous arrays only).

Schemas are immutable and compare structurally, so a schema recovered from an
envelope compares equal to the one it was written with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple, Type, get_args, get_origin

from pydantic import BaseModel

from ..exceptions import SchemaError


class FieldType:
    """Base class of the closed FieldType variant.

    Only the six subclasses defined in this module are valid field types.
    """

    __slots__ = ()

    #: Wire tag used by the schema encoding.
    tag: int = -1
    #: Human readable type name.
    type_name: str = "FieldType"


@dataclass(frozen=True)
class IntegerType(FieldType):
    """Signed 64-bit integer."""

    tag = 0
    type_name = "Integer"

    def __repr__(self) -> str:
        return "Integer"


@dataclass(frozen=True)
class FloatType(FieldType):
    """IEEE-754 double."""

    tag = 1
    type_name = "Float"

    def __repr__(self) -> str:
        return "Float"


@dataclass(frozen=True)
class StringType(FieldType):
    """UTF-8 text."""

    tag = 2
    type_name = "String"

    def __repr__(self) -> str:
        return "String"


@dataclass(frozen=True)
class BooleanType(FieldType):
    """True/False."""

    tag = 3
    type_name = "Boolean"

    def __repr__(self) -> str:
        return "Boolean"


@dataclass(frozen=True)
class ObjectType(FieldType):
    """Nested object described by its own Schema.

    Attributes:
        schema: Schema of the nested object
    """

    schema: Schema
    tag = 4
    type_name = "Object"

    def __post_init__(self) -> None:
        if not isinstance(self.schema, Schema):
            raise SchemaError(f"Object requires a Schema, got {type(self.schema).__name__}")

    def __repr__(self) -> str:
        return f"Object({self.schema!r})"


@dataclass(frozen=True)
class ArrayType(FieldType):
    """Homogeneous array of one element FieldType.

    Attributes:
        element: Type of every element in the array
    """

    element: FieldType
    tag = 5
    type_name = "Array"

    def __post_init__(self) -> None:
        if not isinstance(self.element, FieldType):
            raise SchemaError(
                f"Array requires a FieldType element, got {type(self.element).__name__}"
            )

    def __repr__(self) -> str:
        return f"Array({self.element!r})"


INTEGER = IntegerType()
FLOAT = FloatType()
STRING = StringType()
BOOLEAN = BooleanType()

Field = Tuple[str, FieldType]


@dataclass(frozen=True)
class Schema:
    """Structural description of an object value.

    Attributes:
        fields: Ordered (name, FieldType) pairs

    Example:
        >>> schema = Schema.new([("name", STRING), ("age", INTEGER)])
        >>> schema.field_names()
        ('name', 'age')
    """

    fields: Tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        # Normalize lists of lists into the immutable tuple form
        normalized = tuple((name, field_type) for name, field_type in self.fields)
        for name, field_type in normalized:
            if not isinstance(name, str):
                raise SchemaError(f"Field name must be str, got {type(name).__name__}")
            if not isinstance(field_type, FieldType):
                raise SchemaError(
                    f"Field {name}: expected a FieldType, got {type(field_type).__name__}"
                )
        object.__setattr__(self, "fields", normalized)

    @classmethod
    def new(cls, fields: Iterable[Field]) -> Schema:
        """Create a schema from (name, FieldType) pairs."""
        return cls(tuple(fields))

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> Schema:
        """Create a schema by introspecting a Pydantic model.

        Supported annotations: int, float, str, bool, nested BaseModel
        subclasses and list[T] of any supported T.

        Args:
            model_class: Pydantic model class

        Returns:
            Schema with one field per model field, in declaration order

        Raises:
            SchemaError: If a field annotation has no FieldType equivalent, or
                the model refers to itself directly or through nested models
        """
        if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
            raise SchemaError(f"Expected a Pydantic model class, got {model_class!r}")
        return _schema_for_model(model_class, active=())

    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}: {field_type!r}" for name, field_type in self.fields)
        return f"Schema({{{inner}}})"


def _schema_for_model(model_class: Type[BaseModel], active: Tuple[type, ...]) -> Schema:
    # active holds the models currently being expanded
    active = active + (model_class,)
    fields = []
    for field_name, field_info in model_class.model_fields.items():
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {field_name} has no type annotation")
        fields.append((field_name, _field_type_for(field_name, annotation, active)))
    return Schema(tuple(fields))


def _field_type_for(name: str, annotation: Any, active: Tuple[type, ...]) -> FieldType:
    """Map a Python annotation onto a FieldType."""
    # bool must be checked before int (bool is an int subclass)
    if annotation is bool:
        return BOOLEAN
    if annotation is int:
        return INTEGER
    if annotation is float:
        return FLOAT
    if annotation is str:
        return STRING

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        if annotation in active:
            raise SchemaError(
                f"Field {name}: recursive model {annotation.__name__} has no finite schema"
            )
        return ObjectType(_schema_for_model(annotation, active))

    if get_origin(annotation) is list:
        args = get_args(annotation)
        if len(args) != 1:
            raise SchemaError(f"Field {name}: list requires exactly one element type")
        return ArrayType(_field_type_for(name, args[0], active))

    raise SchemaError(
        f"Field {name}: unsupported type {annotation!r}. "
        f"Supported: int, float, str, bool, nested models, list[T]."
    )
