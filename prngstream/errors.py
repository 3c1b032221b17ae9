"""
Error taxonomy for prngstream.

Every failure is fatal to the run; the CLI maps PrngStreamError to exit
status 1 and leaves usage errors to argparse.
"""


class PrngStreamError(Exception):
    """Base class for all prngstream failures."""


class LengthTooShortError(PrngStreamError, ValueError):
    """Length exponent below the minimum of 4."""

    def __init__(self, lenlog: int, minimum: int):
        super().__init__(f"length too short: exponent {lenlog} < {minimum}")
        self.lenlog = lenlog
        self.minimum = minimum


class SeedFileError(PrngStreamError, OSError):
    """Seed file could not be opened for reading."""


class UnsupportedCipherError(PrngStreamError, ValueError):
    """Cipher name unknown to the registry or to the installed backend."""

    def __init__(self, name: str, reason: str = "unknown cipher"):
        super().__init__(f"unsupported cipher {name!r}: {reason}")
        self.name = name


class EncryptionError(PrngStreamError):
    """The encryption call itself failed (bad key/IV size, partial block, ...)."""


class ConfigError(PrngStreamError, ValueError):
    """A stream option (padding, output format) has an unknown value."""
