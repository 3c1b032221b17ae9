"""
Keystream sample generation for prngstream.

Reads a seed file, derives one key per seed and writes the concatenated
keystreams to stdout, ready to be piped into NIST STS, dieharder, etc.

Usage:
    prngstream aes-256-ctr seeds.txt 20 > sample.bin
    python -m prngstream chacha20 seeds.txt 16 --format bits > sample.txt
    python -m prngstream --list-ciphers
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from tqdm import tqdm

from prngstream.errors import ConfigError, PrngStreamError
from prngstream.generators.ciphers import available_ciphers
from prngstream.generators.keystream import (
    MIN_LENGTH_EXPONENT,
    PADDING_CHOICES,
    KeystreamGenerator,
    length_from_exponent,
)
from prngstream.generators.output import (
    DEFAULT_HEADER_LABEL,
    OUTPUT_FORMATS,
    bit_balance,
    count_ones,
    format_header,
    write_keystream,
)
from prngstream.generators.seeds import SeedFile
from prngstream.utils.config import get_stream_config
from prngstream.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)


@dataclass
class StreamSummary:
    """What a run produced."""

    seeds: int
    declared_seeds: int | None
    bytes_per_seed: int
    bytes_written: int
    ones_ratio: float


def generate_stream(
    cipher: str,
    seed_path: str | Path,
    lenlog: int,
    out: BinaryIO,
    *,
    write_header: bool | None = None,
    strip_newlines: bool | None = None,
    padding: str | None = None,
    output_format: str | None = None,
    progress: bool | None = None,
) -> StreamSummary:
    """Write the header line and one keystream per seed to `out`.

    Options left as None fall back to the `stream` section of config.yaml.
    The length exponent and the padding/format options are checked before
    the seed file is opened, so a bad value produces no output at all.
    The cipher is resolved at the first encryption: an unknown name fails
    after the header line.

    Raises:
        LengthTooShortError, ConfigError, SeedFileError,
        UnsupportedCipherError, EncryptionError
    """
    stream_cfg = get_stream_config()
    if write_header is None:
        write_header = stream_cfg.get("write_header", True)
    if strip_newlines is None:
        strip_newlines = stream_cfg.get("strip_seed_newlines", False)
    if padding is None:
        padding = stream_cfg.get("padding", "none")
    if output_format is None:
        output_format = stream_cfg.get("output_format", "raw")
    if progress is None:
        progress = stream_cfg.get("progress", False)
    label = stream_cfg.get("header_label", DEFAULT_HEADER_LABEL)

    length = length_from_exponent(lenlog)
    if padding not in PADDING_CHOICES:
        raise ConfigError(f"padding must be one of {PADDING_CHOICES}, got {padding!r}")
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"output_format must be one of {OUTPUT_FORMATS}, got {output_format!r}")
    generator = KeystreamGenerator(cipher, length, padding=padding)

    logger.info(f"Cipher: {cipher}, {length} bytes per seed (2^{lenlog} bits)")
    logger.info(f"Seed file: {seed_path}")

    bytes_written = 0
    ones = 0
    keystream_bytes = 0

    with SeedFile(seed_path, strip_newlines=strip_newlines) as seed_file:
        declared = seed_file.declared_count
        if write_header:
            header = format_header(seed_file.header, label)
            out.write(header)
            bytes_written += len(header)

        for seed in tqdm(seed_file, total=declared, desc=f"  {cipher}",
                         unit="seed", leave=False, disable=not progress):
            block = generator(seed)
            bytes_written += write_keystream(out, block, output_format)
            ones += count_ones(block)
            keystream_bytes += len(block)
            logger.debug(f"  seed {seed_file.seeds_read}: {len(block)} bytes, {bit_balance(block):.3f} ones")

        seeds = seed_file.seeds_read

    out.flush()

    if declared is not None and declared != seeds:
        logger.warning(f"Header announces {declared} seeds, file holds {seeds}")

    ones_ratio = ones / (keystream_bytes * 8) if keystream_bytes else 0.0
    logger.info(f"Wrote {seeds} keystreams, {bytes_written} bytes total")
    if keystream_bytes:
        logger.info(f"Bit balance: {ones_ratio:.4f} ones")

    return StreamSummary(
        seeds=seeds,
        declared_seeds=declared,
        bytes_per_seed=length,
        bytes_written=bytes_written,
        ones_ratio=ones_ratio,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prngstream",
        description="Generate cipher keystream samples for statistical randomness testing.",
    )
    parser.add_argument("cipher", nargs="?", help="cipher name, e.g. aes-256-ctr or chacha20")
    parser.add_argument("seed_file", nargs="?", help="seed file: count line, then one seed per line")
    parser.add_argument("length_exponent", nargs="?", type=int,
                        help=f"log2 of the bits per seed (>= {MIN_LENGTH_EXPONENT})")
    parser.add_argument("--list-ciphers", action="store_true",
                        help="print the ciphers the installed backend supports and exit")
    parser.add_argument("--no-header", dest="write_header", action="store_false", default=None,
                        help="omit the 'number of seeds' line")
    parser.add_argument("--strip-newlines", action="store_true", default=None,
                        help="hash seeds without their line terminator")
    parser.add_argument("--padding", choices=PADDING_CHOICES, default=None,
                        help="PKCS#7-pad ECB/CBC input (default: none)")
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, default=None,
                        help="raw bytes or ASCII bits (default: raw)")
    parser.add_argument("--progress", action="store_true", default=None,
                        help="show a progress bar on stderr")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="errors only")
    return parser


def main(argv: list[str] | None = None, stdout: BinaryIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)
    elif args.quiet:
        set_log_level(logging.ERROR)

    if stdout is None:
        stdout = sys.stdout.buffer

    if args.list_ciphers:
        stdout.write("".join(f"{name}\n" for name in available_ciphers()).encode())
        stdout.flush()
        return 0

    if args.length_exponent is None:
        parser.error("expected: cipher seed_file length_exponent")

    try:
        generate_stream(
            args.cipher,
            args.seed_file,
            args.length_exponent,
            stdout,
            write_header=args.write_header,
            strip_newlines=args.strip_newlines,
            padding=args.padding,
            output_format=args.output_format,
            progress=args.progress,
        )
    except PrngStreamError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
