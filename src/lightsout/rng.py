from __future__ import annotations

_MASK32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply, unsigned result."""
    return (a * b) & _MASK32


def hash_seed(seed: str) -> int:
    """Hash an arbitrary string to a 32-bit unsigned seed.

    FNV-1a over the UTF-16 code units of ``seed``. Case-sensitive and
    order-dependent; the empty string maps to the offset basis.
    """
    h = FNV_OFFSET_BASIS
    # surrogatepass keeps lone surrogates as their raw code units
    units = seed.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(units), 2):
        h ^= units[i] | (units[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h


class SeededRandom:
    """Deterministic mulberry32 stream.

    The same seed yields the same sequence of floats on every run, so a
    seed string is enough to replay a puzzle.
    """

    def __init__(self, seed: int | str):
        if isinstance(seed, str):
            seed = hash_seed(seed)
        self.state = int(seed) & _MASK32

    def next_float(self) -> float:
        self.state = (self.state + MULBERRY_INCREMENT) & _MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296.0

    def next_int(self, bound: int) -> int:
        """Uniform integer in [0, bound)."""
        return int(self.next_float() * bound)

    def __repr__(self):
        return f"SeededRandom(state=0x{self.state:08X})"
