import logging
import threading
from typing import Optional

from app.core.exceptions import AllocationError, DecodeError
from app.services.allocator import IdentifierAllocator
from app.utils.encoding import CANONICAL_ALPHABET, decode, encode
from app.utils.permutation import get_permuted_alphabet

logger = logging.getLogger(__name__)


class TokenGenerator:
    """Turns allocator identifiers into short tokens over a permuted alphabet.

    The alphabet is derived once at construction and never changes. Each call
    to `next` consumes exactly one identifier; allocator failures propagate
    without retry so that a successful token always maps to one identifier.
    """

    def __init__(
        self,
        allocator: IdentifierAllocator,
        secret_key,
        canonical_alphabet: str = CANONICAL_ALPHABET,
        offset: int = 0,
    ):
        if offset < 0:
            raise ValueError("offset must be non-negative")
        self.allocator = allocator
        self.alphabet = get_permuted_alphabet(secret_key, canonical_alphabet)
        self.offset = offset
        self._high_water: Optional[int] = None
        self._lock = threading.Lock()

    def next(self) -> str:
        # Any value returned before this call started must be below the new one.
        with self._lock:
            floor = self._high_water

        ident = self.allocator.allocate()

        if isinstance(ident, bool) or not isinstance(ident, int) or ident < 0:
            raise AllocationError(f"allocator returned invalid identifier {ident!r}")
        if floor is not None and ident <= floor:
            logger.error("Non-monotonic identifier %d (already issued up to %d)", ident, floor)
            raise AllocationError(f"allocator returned {ident}, expected a value above {floor}")

        with self._lock:
            if self._high_water is None or ident > self._high_water:
                self._high_water = ident

        return encode(ident + self.offset, self.alphabet)

    def resolve(self, token: str) -> int:
        """Recover the allocator identifier behind a token."""
        value = decode(token, self.alphabet)
        if value < self.offset:
            raise DecodeError(f"token {token!r} is below the configured offset")
        return value - self.offset
