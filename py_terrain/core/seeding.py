"""
Deterministic seeding primitives.

Everything procedural in a world is derived from a single 32-bit seed hashed
from the identity string. The generator here is mulberry32, which gives the
same stream on every platform as long as all arithmetic is folded to 32 bits.
"""

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

_MASK = 0xFFFFFFFF
_TWO_32 = 4294967296.0


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & _MASK


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, result as unsigned."""
    return (a * b) & _MASK


def hash_identity(identity: str) -> int:
    """
    Hash an identity string into an unsigned 32-bit seed.

    djb2 with xor: ``h = (h * 33) ^ c`` starting from 5381. Characters are
    consumed as UTF-16 code units, so a non-BMP character contributes
    its two surrogate halves.

    Args:
        identity: Username or other identifying string

    Returns:
        Seed in [0, 2**32)
    """
    h = 5381
    data = identity.encode("utf-16-le")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = _uint32(h * 33) ^ unit
    return h


def derive_seed(identity: str, variant: str = "") -> int:
    """Seed for one rendering variant (e.g. colour mode) of an identity."""
    return hash_identity(identity + variant)


def offset_seed(seed: int, offset: int) -> int:
    """Shift a seed by a fixed offset, wrapping at 32 bits."""
    return _uint32(seed + offset)


class Mulberry32:
    """
    Seeded pseudo-random generator (mulberry32).

    The whole state is one 32-bit word. Each instance owns its state, so two
    renders never share a stream.
    """

    def __init__(self, seed: int):
        self.state = _uint32(seed)
        self.call_count = 0

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        self.state = (self.state + 0x6D2B79F5) & _MASK
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / _TWO_32

    def randint(self, min_val: int, max_val: int) -> int:
        """Integer in [min_val, max_val] inclusive."""
        return min_val + int(self.random() * (max_val - min_val + 1))

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a fresh generator function producing floats in [0, 1)."""
    return Mulberry32(seed).random
