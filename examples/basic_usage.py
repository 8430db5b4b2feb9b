#!/usr/bin/env python3
"""Basic usage example for mpack.

This example demonstrates:
1. Encoding plain Python data to MessagePack
2. Decoding back to the value model and to plain Python data
3. Choosing explicit value kinds (Float32, Extended)
4. Calculating encoded sizes
"""

from __future__ import annotations

from mpack import (
    Extended,
    Float32,
    Integer,
    Map,
    Str,
    decode,
    decode_map,
    encode,
    encoded_size,
    to_python,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("mpack Basic Usage Example")
    print("=" * 60)
    print()

    # Plain Python data is lifted automatically
    print("1. Encoding a status report...")
    report = {"vehicle_id": 42, "depth_m": 25.0, "battery_pct": 87, "active": True}
    data = encode(report)

    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    print("2. Decoding...")
    value = decode(data)
    print(f"   Value model: {value!r}")
    print(f"   As Python:   {to_python(value)}")
    print()

    # Explicit kinds give control over the wire form
    print("3. Using explicit value kinds...")
    compact = Map(
        {
            Str("vehicle_id"): Integer(42),
            Str("depth_m"): Float32(25.0),
            Str("stamp"): Extended(1, (1700000000).to_bytes(4, "big")),
        }
    )
    compact_data = encode(compact)
    print(f"   float64 depth: {encoded_size(25.0)} bytes")
    print(f"   float32 depth: {encoded_size(Float32(25.0))} bytes")
    print(f"   Record: {len(compact_data)} bytes")
    print()

    print("4. Checked decoding...")
    checked = decode_map(compact_data, key_kind=Str)
    for key, item in checked.items():
        print(f"   {key.text}: {item!r}")
    print()

    print("5. Verifying round-trip...")
    if to_python(decode(data)) == report and decode(compact_data) == compact:
        print("   ✓ Round-trip successful!")
    else:
        print("   ✗ Round-trip failed!")

    print()
    print("=" * 60)


if __name__ == "__main__":
    main()
