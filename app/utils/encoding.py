import string
from functools import lru_cache

from app.core.exceptions import ConfigurationError, DecodeError

# Base62 alphabet: digits, then lowercase, then uppercase
CANONICAL_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(CANONICAL_ALPHABET)


def validate_alphabet(alphabet: str) -> str:
    """Reject alphabets that cannot act as a digit set."""
    if len(alphabet) < 2:
        raise ConfigurationError("alphabet must contain at least 2 symbols")
    if len(set(alphabet)) != len(alphabet):
        duplicates = sorted({ch for ch in alphabet if alphabet.count(ch) > 1})
        raise ConfigurationError(f"alphabet contains duplicate symbols: {''.join(duplicates)!r}")
    return alphabet


@lru_cache(maxsize=32)
def _positions(alphabet: str) -> dict:
    validate_alphabet(alphabet)
    return {ch: i for i, ch in enumerate(alphabet)}


def encode(num: int, alphabet: str = CANONICAL_ALPHABET) -> str:
    """Encode a non-negative integer, most significant symbol first."""
    if isinstance(num, bool) or not isinstance(num, int):
        raise ValueError(f"identifier must be an int, got {type(num).__name__}")
    if num < 0:
        raise ValueError("identifier must be non-negative")
    _positions(alphabet)
    base = len(alphabet)
    if num == 0:
        return alphabet[0]
    out = []
    while num:
        num, rem = divmod(num, base)
        out.append(alphabet[rem])
    return ''.join(reversed(out))


def decode(token: str, alphabet: str = CANONICAL_ALPHABET) -> int:
    """Decode a token produced by `encode` with the same alphabet."""
    positions = _positions(alphabet)
    if not token:
        raise DecodeError("token is empty")
    base = len(alphabet)
    n = 0
    for ch in token:
        try:
            n = n * base + positions[ch]
        except KeyError:
            raise DecodeError(f"symbol {ch!r} is not part of the alphabet") from None
    return n


def offset_for_min_length(min_length: int, base: int = BASE) -> int:
    """Smallest offset that makes identifier 0 encode to `min_length` symbols."""
    if min_length < 1:
        raise ConfigurationError("minimum token length must be at least 1")
    if min_length == 1:
        return 0
    return base ** (min_length - 1)
