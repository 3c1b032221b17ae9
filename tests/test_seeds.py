"""
Tests for the seed-file reader.

Verifies:
  - The first line is the header, every later line is a seed
  - Seeds keep their terminator unless stripping is requested
  - Header-only and empty files yield no seeds
  - Unreadable paths raise SeedFileError
"""

import pytest

from prngstream.errors import SeedFileError
from prngstream.generators.seeds import SeedFile, read_seeds, strip_terminator


@pytest.fixture
def seed_path(tmp_path):
    path = tmp_path / "seeds.txt"
    path.write_bytes(b"3\nabc\n\nlast")
    return path


class TestSeedFile:
    """Reading seeds."""

    def test_header_and_seeds(self, seed_path):
        header, seeds = read_seeds(seed_path)
        assert header == b"3"
        assert seeds == [b"abc\n", b"\n", b"last"]

    def test_strip_newlines(self, seed_path):
        _, seeds = read_seeds(seed_path, strip_newlines=True)
        assert seeds == [b"abc", b"", b"last"]

    def test_crlf(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"1\r\nabc\r\n")
        header, seeds = read_seeds(path, strip_newlines=True)
        assert header == b"1"
        assert seeds == [b"abc"]

    def test_header_only(self, tmp_path):
        path = tmp_path / "header.txt"
        path.write_bytes(b"10\n")
        header, seeds = read_seeds(path)
        assert header == b"10"
        assert seeds == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert read_seeds(path) == (b"", [])

    def test_declared_count(self, seed_path):
        with SeedFile(seed_path) as seed_file:
            assert seed_file.declared_count == 3
            assert len(list(seed_file)) == 3
            assert seed_file.seeds_read == 3

    def test_declared_count_not_a_number(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_bytes(b"many\nx\n")
        with SeedFile(path) as seed_file:
            assert seed_file.declared_count is None

    def test_closed_after_block(self, seed_path):
        with SeedFile(seed_path) as seed_file:
            pass
        with pytest.raises(ValueError):
            list(seed_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SeedFileError):
            read_seeds(tmp_path / "nope.txt")

    def test_seed_file_error_is_oserror(self, tmp_path):
        with pytest.raises(OSError):
            read_seeds(tmp_path / "nope.txt")


class TestStripTerminator:

    @pytest.mark.parametrize("line,expected", [
        (b"abc\n", b"abc"),
        (b"abc\r\n", b"abc"),
        (b"abc", b"abc"),
        (b"\n", b""),
        (b"a\nb\n", b"a\nb"),
    ])
    def test_strip(self, line, expected):
        assert strip_terminator(line) == expected
