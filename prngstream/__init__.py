"""prngstream: cipher keystream samples for statistical randomness testing."""

__version__ = "0.1.0"
