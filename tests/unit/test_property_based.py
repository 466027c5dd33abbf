"""Property-based tests using hypothesis."""

from __future__ import annotations

import os

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from flexbin import (
    BOOLEAN,
    FLOAT,
    INTEGER,
    STRING,
    ArrayType,
    BooleanType,
    CompressionType,
    DeserializeError,
    FieldType,
    FlexBinDeserializer,
    FlexBinSerializer,
    FloatType,
    IntegerType,
    NoCompression,
    ObjectType,
    Schema,
    SchemaError,
    SecurityOptions,
    SerializeError,
    StringType,
    ZlibCompression,
    decode_schema,
    decode_value,
    encode_schema,
    encode_value,
    sign,
    verify,
)
from flexbin.codec import MAX_SCHEMA_DEPTH
from flexbin.codec.buffer import I64_MAX, I64_MIN

ENCRYPTION_KEY = os.urandom(32)
SIGNING_KEY = os.urandom(32)

READING = Schema.new(
    [
        ("sensor", STRING),
        ("count", INTEGER),
        ("value", FLOAT),
        ("valid", BOOLEAN),
        ("tags", ArrayType(STRING)),
        ("location", ObjectType(Schema.new([("lat", FLOAT), ("lon", FLOAT)]))),
    ]
)

floats = st.floats(allow_nan=False)

readings = st.fixed_dictionaries(
    {
        "sensor": st.text(),
        "count": st.integers(min_value=I64_MIN, max_value=I64_MAX),
        "value": floats,
        "valid": st.booleans(),
        "tags": st.lists(st.text(max_size=20), max_size=10),
        "location": st.fixed_dictionaries({"lat": floats, "lon": floats}),
    }
)

field_names = st.text(min_size=1, max_size=12)
scalar_types = st.sampled_from([INTEGER, FLOAT, STRING, BOOLEAN])


def _unique_fields(children: st.SearchStrategy, max_size: int) -> st.SearchStrategy:
    return st.lists(
        st.tuples(field_names, children), max_size=max_size, unique_by=lambda field: field[0]
    )


def _schemas(children: st.SearchStrategy) -> st.SearchStrategy:
    return st.one_of(
        st.builds(ArrayType, children),
        _unique_fields(children, 4).map(lambda fields: ObjectType(Schema.new(fields))),
    )


field_types = st.recursive(scalar_types, _schemas, max_leaves=12)
schemas = _unique_fields(field_types, 6).map(Schema.new)


def _values_for(field_type: FieldType) -> st.SearchStrategy:
    """Strategy producing values that match field_type."""
    if isinstance(field_type, IntegerType):
        return st.integers(min_value=I64_MIN, max_value=I64_MAX)
    if isinstance(field_type, FloatType):
        return floats
    if isinstance(field_type, StringType):
        return st.text(max_size=20)
    if isinstance(field_type, BooleanType):
        return st.booleans()
    if isinstance(field_type, ObjectType):
        return _objects_for(field_type.schema)
    return st.lists(_values_for(field_type.element), max_size=4)


def _objects_for(schema: Schema) -> st.SearchStrategy:
    return st.fixed_dictionaries({name: _values_for(inner) for name, inner in schema.fields})


SECURITY_OPTIONS = [
    SecurityOptions(),
    SecurityOptions(enable_encryption=True, encryption_key=ENCRYPTION_KEY),
    SecurityOptions(enable_signing=True, signing_key=SIGNING_KEY),
    SecurityOptions(
        enable_encryption=True,
        enable_signing=True,
        encryption_key=ENCRYPTION_KEY,
        signing_key=SIGNING_KEY,
    ),
]


class TestCompressionProperties:
    """Property-based tests for compression strategies."""

    @given(payload=st.binary(max_size=2000))
    def test_zlib_symmetry(self, payload: bytes) -> None:
        """Test zlib decompress inverts compress."""
        strategy = ZlibCompression()
        assert strategy.decompress(strategy.compress(payload)) == payload

    @given(payload=st.binary(max_size=2000))
    def test_identity_symmetry(self, payload: bytes) -> None:
        """Test the identity strategy is symmetric."""
        strategy = NoCompression()
        assert strategy.decompress(strategy.compress(payload)) == payload


class TestCodecProperties:
    """Property-based tests for schema and value encoding."""

    @given(schema=schemas)
    def test_schema_roundtrip(self, schema: Schema) -> None:
        """Test arbitrary schemas survive encoding."""
        assert decode_schema(encode_schema(schema)) == schema

    @given(value=readings)
    def test_value_roundtrip(self, value: dict) -> None:
        """Test values decode to what was encoded."""
        assert decode_value(READING, encode_value(READING, value)) == value

    @given(value=readings)
    def test_encode_deterministic(self, value: dict) -> None:
        """Test encoding is deterministic."""
        assert encode_value(READING, value) == encode_value(READING, dict(value))


class TestEnvelopeProperties:
    """Property-based tests for the full envelope pipeline."""

    @pytest.mark.parametrize("compression", [CompressionType.NONE, CompressionType.ZLIB])
    @pytest.mark.parametrize(
        "options", SECURITY_OPTIONS, ids=["plain", "encrypted", "signed", "encrypted-signed"]
    )
    @settings(max_examples=50)
    @given(data=st.data())
    def test_roundtrip(
        self, compression: CompressionType, options: SecurityOptions, data: st.DataObject
    ) -> None:
        """Test deserialize inverts serialize for any schema and configuration."""
        schema = data.draw(schemas)
        value = data.draw(_objects_for(schema))

        envelope = FlexBinSerializer(schema, compression, options).serialize(value)
        decoded_schema, decoded = FlexBinDeserializer(compression, options).deserialize(envelope)

        assert decoded_schema == schema
        assert decoded == value

    @given(
        levels=st.integers(min_value=0, max_value=MAX_SCHEMA_DEPTH + 8),
        as_array=st.booleans(),
    )
    def test_accepted_envelopes_always_decode(self, levels: int, as_array: bool) -> None:
        """Test serialize refuses exactly the nesting deserialize would refuse."""
        field_type: FieldType = INTEGER
        value: object = 7
        for _ in range(levels):
            if as_array:
                field_type, value = ArrayType(field_type), [value]
            else:
                field_type, value = ObjectType(Schema.new([("n", field_type)])), {"n": value}
        schema = Schema.new([("root", field_type)])

        try:
            envelope = FlexBinSerializer(schema).serialize({"root": value})
        except SerializeError as e:
            assert isinstance(e.cause, SchemaError)
            assert levels > MAX_SCHEMA_DEPTH
            return

        assert levels <= MAX_SCHEMA_DEPTH
        assert FlexBinDeserializer().deserialize(envelope) == (schema, {"root": value})

    @given(value=readings)
    def test_fixed_schema_roundtrip(self, value: dict) -> None:
        """Test a realistic nested record survives the zlib pipeline."""
        data = FlexBinSerializer(READING, CompressionType.ZLIB).serialize(value)
        assert FlexBinDeserializer(CompressionType.ZLIB).deserialize(data) == (READING, value)

    @settings(max_examples=50)
    @given(value=readings, data=st.data())
    def test_tamper_detection(self, value: dict, data: st.DataObject) -> None:
        """Test flipping any single byte of an encrypted envelope is detected."""
        options = SecurityOptions(enable_encryption=True, encryption_key=ENCRYPTION_KEY)
        envelope = bytearray(FlexBinSerializer(READING, security_options=options).serialize(value))

        index = data.draw(st.integers(min_value=0, max_value=len(envelope) - 1))
        bit = data.draw(st.integers(min_value=0, max_value=7))
        envelope[index] ^= 1 << bit

        with pytest.raises(DeserializeError):
            FlexBinDeserializer(security_options=options).deserialize(bytes(envelope))


class TestSigningProperties:
    """Property-based tests for keyed signatures."""

    @given(payload=st.binary(max_size=1000))
    def test_sign_verify(self, payload: bytes) -> None:
        """Test a tag always verifies against its own message."""
        assert verify(payload, sign(payload, SIGNING_KEY), SIGNING_KEY)

    @given(payload=st.binary(min_size=1, max_size=1000), data=st.data())
    def test_mutation_rejected(self, payload: bytes, data: st.DataObject) -> None:
        """Test any single-byte change invalidates the tag."""
        tag = sign(payload, SIGNING_KEY)

        index = data.draw(st.integers(min_value=0, max_value=len(payload) - 1))
        delta = data.draw(st.integers(min_value=1, max_value=255))
        mutated = bytearray(payload)
        mutated[index] ^= delta

        assert not verify(bytes(mutated), tag, SIGNING_KEY)
