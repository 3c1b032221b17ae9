"""
Keystream generation for prngstream.

Each seed yields one keystream block:

    key       = SHA-256(seed)                       (32 bytes)
    iv        = "0000000000000000"[:iv_length]      (NUL-padded past 16)
    plaintext = "0" * length                        (ASCII 0x30, not NUL)
    keystream = Encrypt(cipher, key, iv, plaintext)

The fixed IV and the ASCII '0' filler are kept for bit-for-bit compatibility
with samples produced by the reference tool; this is a randomness sampler,
not an encryption scheme.
"""

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, padding as sym_padding

from prngstream.errors import EncryptionError, LengthTooShortError, UnsupportedCipherError
from prngstream.generators.ciphers import (
    AEAD_TAG_LENGTH,
    CipherSpec,
    build_cipher,
    fit_key,
    get_cipher,
)

FIXED_IV = b"0000000000000000"
PLAINTEXT_FILL = b"0"
MIN_LENGTH_EXPONENT = 4
PADDING_CHOICES = ("none", "pkcs7")


def length_from_exponent(lenlog: int) -> int:
    """Bytes per seed for a bit-length exponent: 2^lenlog bits = 2^(lenlog-3) bytes.

    Raises:
        TypeError: `lenlog` is not an int.
        LengthTooShortError: `lenlog` is below MIN_LENGTH_EXPONENT.
    """
    if isinstance(lenlog, bool) or not isinstance(lenlog, int):
        raise TypeError(f"length exponent must be an int, got {type(lenlog).__name__}")
    if lenlog < MIN_LENGTH_EXPONENT:
        raise LengthTooShortError(lenlog, MIN_LENGTH_EXPONENT)
    return 2 ** (lenlog - 3)


def derive_key(seed: bytes) -> bytes:
    """SHA-256 digest of the raw seed bytes."""
    digest = hashes.Hash(hashes.SHA256())
    digest.update(seed)
    return digest.finalize()


def derive_iv(iv_length: int) -> bytes:
    """FIXED_IV cut to `iv_length`, NUL-padded if the cipher wants more."""
    iv = FIXED_IV[:iv_length]
    return iv + b"\x00" * (iv_length - len(iv))


def encrypt_zero_block(
    spec: CipherSpec, key: bytes, iv: bytes, length: int, padding: str = "none"
) -> bytes:
    """Encrypt `length` bytes of PLAINTEXT_FILL under (key, iv).

    The key is fitted to the cipher's key length first. AEAD modes return
    the ciphertext without its tag. With padding="pkcs7", ECB/CBC inputs are
    PKCS#7-padded; otherwise a partial block is an EncryptionError.

    Raises:
        UnsupportedCipherError: backend cannot run this cipher.
        EncryptionError: anything the primitive rejects.
    """
    if padding not in PADDING_CHOICES:
        raise ValueError(f"padding must be one of {PADDING_CHOICES}, got {padding!r}")

    plaintext = PLAINTEXT_FILL * length
    key = fit_key(key, spec.key_length)

    try:
        if spec.is_aead:
            sealed = spec.algorithm(key).encrypt(iv, plaintext, None)
            return sealed[:-AEAD_TAG_LENGTH]

        if padding == "pkcs7" and spec.needs_full_blocks:
            padder = sym_padding.PKCS7(spec.block_size * 8).padder()
            plaintext = padder.update(plaintext) + padder.finalize()

        encryptor = build_cipher(spec, key, iv).encryptor()
        return encryptor.update(plaintext) + encryptor.finalize()
    except UnsupportedAlgorithm as e:
        raise UnsupportedCipherError(spec.name, str(e)) from e
    except ValueError as e:
        raise EncryptionError(f"{spec.name}: {e}") from e


def generate_keystream(
    cipher: str | CipherSpec, seed: bytes, length: int, padding: str = "none"
) -> bytes:
    """Keystream block for one seed."""
    spec = get_cipher(cipher) if isinstance(cipher, str) else cipher
    return encrypt_zero_block(
        spec, derive_key(seed), derive_iv(spec.iv_length), length, padding
    )


class KeystreamGenerator:
    """Produces keystream blocks for a fixed cipher and length.

    The cipher name is resolved on the first call, so a bad name surfaces
    as an error at the first encryption rather than at construction.
    """

    def __init__(self, cipher: str, length: int, padding: str = "none"):
        self.cipher = cipher
        self.length = length
        self.padding = padding
        self._spec = None

    @property
    def spec(self) -> CipherSpec:
        if self._spec is None:
            self._spec = get_cipher(self.cipher)
        return self._spec

    def generate(self, seed: bytes) -> bytes:
        return generate_keystream(self.spec, seed, self.length, self.padding)

    __call__ = generate
