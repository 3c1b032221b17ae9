"""
Seed-file reader for prngstream.

File layout:
    line 1      informational seed count (echoed, never enforced)
    line 2..n   one seed per line

Lines are read as raw bytes. By default a seed keeps its line terminator,
so "abc\\n" and a final unterminated "abc" hash to different keys; pass
strip_newlines=True to hash the bare text instead.
"""

from pathlib import Path

from prngstream.errors import SeedFileError
from prngstream.utils.logger import get_logger

logger = get_logger(__name__)


def strip_terminator(line: bytes) -> bytes:
    """Remove a trailing \\n or \\r\\n."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


class SeedFile:
    """Context manager over a seed file.

    Usage:
        with SeedFile("seeds.txt") as seeds:
            print(seeds.header_text)
            for seed in seeds:
                ...
    """

    def __init__(self, path: str | Path, strip_newlines: bool = False):
        self.path = Path(path)
        self.strip_newlines = strip_newlines
        self.header = b""
        self.seeds_read = 0
        self._handle = None

    def __enter__(self) -> "SeedFile":
        try:
            self._handle = open(self.path, "rb")
        except OSError as e:
            raise SeedFileError(f"Failed to open seed file {self.path}: {e.strerror or e}") from e
        self.header = self._handle.readline()
        logger.debug(f"Opened {self.path}, header {self.header_text!r}")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    @property
    def header_text(self) -> bytes:
        """Header line without its terminator."""
        return strip_terminator(self.header)

    @property
    def declared_count(self) -> int | None:
        """Seed count announced by the header, or None if it is not a number."""
        try:
            return int(self.header_text.strip())
        except ValueError:
            return None

    def __iter__(self):
        if self._handle is None:
            raise ValueError(f"SeedFile {self.path} is not open")
        for line in self._handle:
            self.seeds_read += 1
            yield strip_terminator(line) if self.strip_newlines else line


def read_seeds(path: str | Path, strip_newlines: bool = False) -> tuple[bytes, list[bytes]]:
    """Read a whole seed file.

    Returns:
        (header line without terminator, list of seeds)
    """
    with SeedFile(path, strip_newlines=strip_newlines) as seed_file:
        seeds = list(seed_file)
    return seed_file.header_text, seeds
