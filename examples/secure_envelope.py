#!/usr/bin/env python3
"""Encrypted and signed envelope example.

This example demonstrates:
1. Configuring SecurityOptions with encryption and signing keys
2. Inspecting the size overhead of each security layer
3. Detecting tampering and wrong keys on the receiving side
"""

from __future__ import annotations

import os

from flexbin import (
    FLOAT,
    INTEGER,
    STRING,
    CompressionType,
    DeserializeError,
    FlexBinDeserializer,
    FlexBinSerializer,
    Schema,
    SecurityOptions,
    encoded_size,
    envelope_overhead,
    setup_logging,
)


def main() -> None:
    """Run the secure envelope example."""
    setup_logging("WARNING")

    print("=" * 60)
    print("flexbin Secure Envelope Example")
    print("=" * 60)
    print()

    schema = Schema.new([("vehicle", STRING), ("sequence", INTEGER), ("depth_m", FLOAT)])
    value = {"vehicle": "auv-7", "sequence": 12, "depth_m": 42.5}

    options = SecurityOptions(
        enable_encryption=True,
        enable_signing=True,
        encryption_key=os.urandom(32),
        signing_key=os.urandom(32),
    )
    print(f"1. Options: {options!r}")
    print()

    print("2. Sizes...")
    data = FlexBinSerializer(schema, CompressionType.NONE, options).serialize(value)
    print(f"   Schema + value: {encoded_size(schema, value)} bytes")
    print(f"   Security overhead: {envelope_overhead(options)} bytes")
    print(f"   Envelope: {len(data)} bytes")
    print()

    receiver = FlexBinDeserializer(CompressionType.NONE, options)
    print("3. Receiving the untouched envelope...")
    print(f"   {receiver.deserialize(data)[1]}")
    print()

    print("4. Receiving a tampered envelope...")
    tampered = bytearray(data)
    tampered[20] ^= 0x01
    try:
        receiver.deserialize(bytes(tampered))
    except DeserializeError as e:
        print(f"   ✓ Rejected: {e}")
    print()

    print("5. Receiving with the wrong encryption key...")
    wrong = options.model_copy(update={"encryption_key": os.urandom(32)})
    try:
        FlexBinDeserializer(CompressionType.NONE, wrong).deserialize(data)
    except DeserializeError as e:
        print(f"   ✓ Rejected: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
