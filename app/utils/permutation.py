import hashlib
import logging
from functools import lru_cache
from typing import Union

from app.core.exceptions import ConfigurationError
from app.utils.encoding import CANONICAL_ALPHABET, validate_alphabet

logger = logging.getLogger(__name__)

SEED_SIZE = 32
BLOCK_SIZE = 64
WORD_SIZE = 4
WORD_RANGE = 1 << (8 * WORD_SIZE)


class KeyStream:
    """Counter-mode BLAKE2b byte stream.

    Block i is BLAKE2b keyed with the seed over the 8-byte big-endian counter i,
    so the output depends only on the seed.
    """

    def __init__(self, seed: bytes):
        if not 1 <= len(seed) <= 64:
            raise ValueError("seed must be between 1 and 64 bytes")
        self._seed = seed
        self._counter = 0
        self._buffer = b""

    def read(self, size: int) -> bytes:
        while len(self._buffer) < size:
            block = hashlib.blake2b(
                self._counter.to_bytes(8, "big"), key=self._seed, digest_size=BLOCK_SIZE
            ).digest()
            self._buffer += block
            self._counter += 1
        out, self._buffer = self._buffer[:size], self._buffer[size:]
        return out

    def below(self, bound: int) -> int:
        """Uniform integer in [0, bound) by rejection sampling on 32-bit words."""
        if not 0 < bound <= WORD_RANGE:
            raise ValueError("bound out of range")
        limit = WORD_RANGE - WORD_RANGE % bound
        while True:
            word = int.from_bytes(self.read(WORD_SIZE), "big")
            if word < limit:
                return word % bound


def _key_bytes(secret_key: Union[str, bytes]) -> bytes:
    if isinstance(secret_key, str):
        secret_key = secret_key.encode("utf-8")
    if not secret_key:
        raise ConfigurationError("secret key must not be empty")
    return bytes(secret_key)


def derive_alphabet(secret_key: Union[str, bytes], canonical_alphabet: str = CANONICAL_ALPHABET) -> str:
    """Shuffle `canonical_alphabet` deterministically from `secret_key`.

    The key is digested with BLAKE2b and the digest seeds a KeyStream that
    drives a Fisher-Yates shuffle. The same key always yields the same order.
    This obfuscates token order; it is not a cryptographic guarantee.
    """
    key = _key_bytes(secret_key)
    validate_alphabet(canonical_alphabet)

    seed = hashlib.blake2b(key, digest_size=SEED_SIZE).digest()
    stream = KeyStream(seed)

    symbols = list(canonical_alphabet)
    for i in range(len(symbols) - 1, 0, -1):
        j = stream.below(i + 1)
        symbols[i], symbols[j] = symbols[j], symbols[i]
    return ''.join(symbols)


@lru_cache(maxsize=8)
def get_permuted_alphabet(secret_key: Union[str, bytes], canonical_alphabet: str = CANONICAL_ALPHABET) -> str:
    permuted = derive_alphabet(secret_key, canonical_alphabet)
    fingerprint = hashlib.blake2b(permuted.encode("utf-8"), digest_size=4).hexdigest()
    logger.debug("Derived permuted alphabet (%d symbols, fingerprint %s)", len(permuted), fingerprint)
    return permuted
