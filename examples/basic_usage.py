#!/usr/bin/env python3
"""Basic usage example for flexbin.

This example demonstrates:
1. Deriving a schema from a Pydantic model
2. Serializing a value into a self-describing envelope
3. Recovering the schema and value without knowing the type
4. Comparing sizes with and without zlib compression
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from flexbin import (
    CompressionType,
    FlexBinDeserializer,
    FlexBinSerializer,
    Schema,
    encode_schema,
    setup_logging,
)


class StatusReport(BaseModel):
    """Underwater vehicle status report."""

    vehicle: str
    depth_cm: int
    battery_pct: float
    active: bool
    log: List[str]


def main() -> None:
    """Run the basic usage example."""
    setup_logging("WARNING")

    print("=" * 60)
    print("flexbin Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Deriving the schema from StatusReport...")
    schema = Schema.from_model(StatusReport)
    print(f"   {schema!r}")
    print(f"   Encoded schema: {len(encode_schema(schema))} bytes")
    print()

    report = StatusReport(
        vehicle="auv-7",
        depth_cm=2500,
        battery_pct=87.5,
        active=True,
        log=["descending"] * 20,
    )

    print("2. Serializing without compression...")
    plain = FlexBinSerializer(schema).serialize(report)
    print(f"   Envelope size: {len(plain)} bytes")
    print(f"   Hex: {plain[:32].hex()}...")
    print()

    print("3. Deserializing with no type knowledge...")
    recovered_schema, value = FlexBinDeserializer().deserialize(plain)
    print(f"   Schema matches: {recovered_schema == schema}")
    print(f"   Value: vehicle={value['vehicle']} depth_cm={value['depth_cm']}")
    print()

    print("4. Serializing with zlib...")
    packed = FlexBinSerializer(schema, CompressionType.ZLIB).serialize(report)
    _, restored = FlexBinDeserializer(CompressionType.ZLIB).deserialize(packed, model=StatusReport)
    print(f"   Envelope size: {len(packed)} bytes ({len(plain) / len(packed):.1f}x smaller)")
    if restored == report:
        print("   ✓ Round-trip successful! Reports match.")
    else:
        print("   ✗ Round-trip failed! Reports don't match.")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
