"""
Output writer for prngstream.

The stream is one diagnostic line (the header line exactly as read, plus
"\\n") followed by the keystream blocks of every seed, concatenated with
no framing. In "bits" format each byte becomes eight ASCII '0'/'1'
characters, most significant bit first, which is the ASCII input format
of the NIST STS suite.
"""

from typing import BinaryIO

import numpy as np

OUTPUT_FORMATS = ("raw", "bits")
DEFAULT_HEADER_LABEL = "number of seeds: "


def format_header(header: bytes, label: str = DEFAULT_HEADER_LABEL) -> bytes:
    """Diagnostic line: label, the raw header line (terminator included), a newline."""
    return label.encode() + header + b"\n"


def to_ascii_bits(data: bytes) -> bytes:
    """b"\\x0f" -> b"00001111"."""
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
    return (bits + ord("0")).tobytes()


def count_ones(data: bytes) -> int:
    return int(np.unpackbits(np.frombuffer(data, dtype=np.uint8)).sum())


def bit_balance(data: bytes) -> float:
    """Fraction of one bits in `data` (0.0 for empty input)."""
    if not data:
        return 0.0
    return count_ones(data) / (len(data) * 8)


def write_keystream(out: BinaryIO, data: bytes, output_format: str = "raw") -> int:
    """Write one keystream block; returns the number of bytes written."""
    if output_format == "raw":
        payload = data
    elif output_format == "bits":
        payload = to_ascii_bits(data)
    else:
        raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got {output_format!r}")
    out.write(payload)
    return len(payload)
