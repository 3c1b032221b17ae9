"""
Tests for the output writer.
"""

import io

import pytest

from prngstream.generators.output import (
    bit_balance,
    count_ones,
    format_header,
    to_ascii_bits,
    write_keystream,
)


class TestHeader:

    @pytest.mark.parametrize("header,expected", [
        (b"10\n", b"number of seeds: 10\n\n"),
        (b"10\r\n", b"number of seeds: 10\r\n\n"),
        (b"10", b"number of seeds: 10\n"),
        (b"", b"number of seeds: \n"),
    ])
    def test_header_kept_verbatim(self, header, expected):
        assert format_header(header) == expected

    def test_custom_label(self):
        assert format_header(b"4\n", "seeds=") == b"seeds=4\n\n"


class TestBits:

    def test_ascii_bits(self):
        assert to_ascii_bits(b"\x0f\x80") == b"0000111110000000"

    def test_empty(self):
        assert to_ascii_bits(b"") == b""
        assert bit_balance(b"") == 0.0

    def test_counts(self):
        assert count_ones(b"\xff\x01") == 9
        assert bit_balance(b"\xff\x00") == 0.5


class TestWriteKeystream:

    def test_raw(self):
        out = io.BytesIO()
        assert write_keystream(out, b"\x01\x02") == 2
        assert out.getvalue() == b"\x01\x02"

    def test_bits(self):
        out = io.BytesIO()
        assert write_keystream(out, b"\x01", "bits") == 8
        assert out.getvalue() == b"00000001"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            write_keystream(io.BytesIO(), b"\x01", "hex")
