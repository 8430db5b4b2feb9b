#!/usr/bin/env python3
"""Streaming example for mpack.

Writes a sequence of telemetry records to a file with one Encoder and reads
them back with one Decoder. Each decode() call consumes exactly one record.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from mpack import Decoder, Encoder, TruncatedInput, to_python


def main() -> None:
    """Run the streaming example."""
    logging.basicConfig(level=logging.INFO)

    records = [
        {"seq": i, "depth_m": 10.0 + i / 4, "samples": list(range(i))}
        for i in range(5)
    ]

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "telemetry.bin"

        with path.open("wb") as f:
            encoder = Encoder(f)
            for record in records:
                encoder.encode(record)
            encoder.flush()
        print(f"Wrote {len(records)} records, {path.stat().st_size} bytes")

        with path.open("rb") as f:
            decoder = Decoder(f)
            while True:
                try:
                    record = to_python(decoder.decode())
                except TruncatedInput:
                    break
                print(f"  seq={record['seq']} depth={record['depth_m']} "
                      f"samples={len(record['samples'])}")


if __name__ == "__main__":
    main()
