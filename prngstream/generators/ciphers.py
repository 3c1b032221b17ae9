"""
Cipher registry for prngstream.

Maps OpenSSL-style cipher names ("aes-256-ctr", "chacha20", "bf-cbc", ...)
onto `cryptography` primitives. The registry is composed from a family x
mode table rather than listed by hand; whether the installed backend can
actually run a given entry is decided by the backend itself, at encryption
time or through `available_ciphers()`.

Key and IV lengths follow the values the OpenSSL EVP layer reports for each
name, so a 32-byte SHA-256 digest is cut down (or NUL-padded) exactly as the
reference tool's library did before the cipher saw it.
"""

from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.decrepit.ciphers import modes as decrepit_modes
from cryptography.hazmat.decrepit.ciphers.algorithms import (
    ARC4,
    CAST5,
    SEED,
    Blowfish,
    Camellia,
    TripleDES,
)
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import (
    AESCCM,
    AESOCB3,
    ChaCha20Poly1305,
)

from prngstream.errors import UnsupportedCipherError


# Modes that take the IV through a mode object; CFB/CFB8/OFB live in decrepit
CIPHER_MODES = {
    "cbc": modes.CBC,
    "cfb": decrepit_modes.CFB,
    "cfb8": decrepit_modes.CFB8,
    "ctr": modes.CTR,
    "ofb": decrepit_modes.OFB,
    "gcm": modes.GCM,
    "xts": modes.XTS,
}

# One-shot AEAD constructions; their output carries a trailing 16-byte tag
AEAD_MODES = {
    "ccm": AESCCM,
    "ocb": AESOCB3,
    "poly1305": ChaCha20Poly1305,
}
AEAD_TAG_LENGTH = 16

# Modes that only accept whole blocks (no padding unless requested)
PADDED_MODES = frozenset({"ecb", "cbc"})


@dataclass(frozen=True)
class CipherSpec:
    """One named cipher/mode combination."""

    name: str
    family: str
    mode: str          # key into CIPHER_MODES / AEAD_MODES, or "ecb" / "stream"
    key_length: int    # bytes
    iv_length: int     # bytes; 0 when the mode takes no IV
    block_size: int    # bytes; 1 for stream ciphers
    algorithm: type

    @property
    def is_aead(self) -> bool:
        return self.mode in AEAD_MODES

    @property
    def needs_full_blocks(self) -> bool:
        return self.mode in PADDED_MODES


# family -> (algorithm class, block size, {size label: key bytes}, modes)
BLOCK_FAMILIES = {
    "aes": (
        algorithms.AES, 16, {"128": 16, "192": 24, "256": 32},
        ("cbc", "cfb", "cfb8", "ctr", "ecb", "ofb", "gcm", "ccm", "ocb"),
    ),
    "camellia": (
        Camellia, 16, {"128": 16, "192": 24, "256": 32},
        ("cbc", "cfb", "cfb8", "ctr", "ecb", "ofb"),
    ),
    "sm4": (algorithms.SM4, 16, {None: 16}, ("cbc", "cfb", "ctr", "ecb", "ofb")),
    "seed": (SEED, 16, {None: 16}, ("cbc", "cfb", "ecb", "ofb")),
    # Blowfish takes the full digest; CAST5 caps its key at 128 bits
    "bf": (Blowfish, 8, {None: 32}, ("cbc", "cfb", "ecb", "ofb")),
    "cast5": (CAST5, 8, {None: 16}, ("cbc", "cfb", "ecb", "ofb")),
    # Single DES is 3DES with K1 = K2 = K3
    "des": (TripleDES, 8, {None: 8}, ("cbc", "cfb", "cfb8", "ecb", "ofb")),
}

# Bare "des-ede"/"des-ede3" mean ECB, the other modes are suffixed
TRIPLE_DES_VARIANTS = {
    "des-ede": (16, ("cbc", "cfb", "ofb")),
    "des-ede3": (24, ("cbc", "cfb", "cfb8", "ofb")),
}


def _iv_length(mode: str, block_size: int) -> int:
    if mode in ("ecb", "stream"):
        return 0
    if mode in ("gcm", "ccm", "ocb", "poly1305"):
        return 12
    if mode == "xts":
        return 16
    return block_size


def _block_spec(name, family, algorithm, block_size, key_length, mode):
    if mode in AEAD_MODES:
        algorithm = AEAD_MODES[mode]
    return CipherSpec(
        name=name,
        family=family,
        mode=mode,
        key_length=key_length,
        iv_length=_iv_length(mode, block_size),
        block_size=block_size,
        algorithm=algorithm,
    )


def _build_registry() -> dict[str, CipherSpec]:
    registry = {}

    for family, (algorithm, block_size, sizes, family_modes) in BLOCK_FAMILIES.items():
        for label, key_length in sizes.items():
            prefix = f"{family}-{label}" if label else family
            for mode in family_modes:
                name = f"{prefix}-{mode}"
                registry[name] = _block_spec(
                    name, family, algorithm, block_size, key_length, mode
                )

    for prefix, (key_length, suffixed_modes) in TRIPLE_DES_VARIANTS.items():
        registry[prefix] = _block_spec(prefix, "des", TripleDES, 8, key_length, "ecb")
        for mode in suffixed_modes:
            name = f"{prefix}-{mode}"
            registry[name] = _block_spec(name, "des", TripleDES, 8, key_length, mode)

    # XTS splits its key in two halves, hence double length
    registry["aes-128-xts"] = _block_spec("aes-128-xts", "aes", algorithms.AES, 16, 32, "xts")
    registry["aes-256-xts"] = _block_spec("aes-256-xts", "aes", algorithms.AES, 16, 64, "xts")

    # rc4-40 is variable-length in OpenSSL and ends up keyed like rc4
    for name in ("rc4", "rc4-40"):
        registry[name] = CipherSpec(name, "rc4", "stream", 32, 0, 1, ARC4)
    registry["chacha20"] = CipherSpec("chacha20", "chacha20", "stream", 32, 16, 1, algorithms.ChaCha20)
    registry["chacha20-poly1305"] = CipherSpec(
        "chacha20-poly1305", "chacha20", "poly1305", 32, 12, 1, ChaCha20Poly1305
    )

    for bits in ("128", "192", "256"):
        for mode in ("gcm", "ccm"):
            registry[f"id-aes{bits}-{mode}"] = registry[f"aes-{bits}-{mode}"]

    return registry


# Registry: name -> CipherSpec
CIPHERS = _build_registry()


def get_cipher(name: str) -> CipherSpec:
    """Look up a cipher by its OpenSSL-style name (case-insensitive)."""
    try:
        return CIPHERS[name.lower()]
    except KeyError:
        raise UnsupportedCipherError(name) from None


def cipher_iv_length(name: str) -> int:
    """IV length in bytes the named cipher expects (0 for ECB and RC4)."""
    return get_cipher(name).iv_length


def fit_key(key: bytes, key_length: int) -> bytes:
    """Truncate or NUL-pad `key` to `key_length` bytes."""
    if len(key) >= key_length:
        return key[:key_length]
    return key + b"\x00" * (key_length - len(key))


def build_cipher(spec: CipherSpec, key: bytes, iv: bytes) -> Cipher:
    """Construct the `Cipher` object for a non-AEAD spec.

    Raises:
        UnsupportedAlgorithm: the backend lacks this algorithm/mode pair
            (surfaced when the encryptor is created).
        ValueError: key or IV size rejected by the primitive.
    """
    if spec.mode == "stream":
        if spec.algorithm is algorithms.ChaCha20:
            return Cipher(algorithms.ChaCha20(key, iv), mode=None)
        return Cipher(spec.algorithm(key), mode=None)
    if spec.mode == "ecb":
        return Cipher(spec.algorithm(key), modes.ECB())
    return Cipher(spec.algorithm(key), CIPHER_MODES[spec.mode](iv))


def is_supported(spec: CipherSpec) -> bool:
    """Probe the installed backend with a throwaway key."""
    key = bytes(range(1, spec.key_length + 1))
    iv = bytes(spec.iv_length)
    try:
        if spec.is_aead:
            spec.algorithm(key)
        else:
            build_cipher(spec, key, iv).encryptor()
    except UnsupportedAlgorithm:
        return False
    return True


def available_ciphers() -> list[str]:
    """Sorted cipher names the installed `cryptography` backend can run."""
    return sorted(name for name, spec in CIPHERS.items() if is_supported(spec))
