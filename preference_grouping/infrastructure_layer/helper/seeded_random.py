import math
import os
import random
import zlib
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_UINT32_MASK = 0xFFFFFFFF
_UINT32_RANGE = 4294967296
_MULBERRY_INCREMENT = 0x6D2B79F5

RandomSourceFactory = Callable[[Optional[int]], random.Random]


def _imul(a: int, b: int) -> int:
    return (a * b) & _UINT32_MASK


class Mulberry32Random(random.Random):
    """
    random.Random backed by the mulberry32 generator.

    The 32-bit state arithmetic makes the sequence identical on every platform
    for a given seed, which plain random.Random does not promise across versions.
    """

    def __init__(self, seed: Optional[int] = None):
        self._state = 0
        super().__init__(seed)

    def seed(self, a=None, version=2) -> None:
        if a is None:
            a = int.from_bytes(os.urandom(4), "big")
        self._state = int(a) & _UINT32_MASK
        self.gauss_next = None

    def next_uint32(self) -> int:
        self._state = (self._state + _MULBERRY_INCREMENT) & _UINT32_MASK
        x = self._state
        x = _imul(x ^ (x >> 15), x | 1)
        x ^= (x + _imul(x ^ (x >> 7), x | 61)) & _UINT32_MASK
        return (x ^ (x >> 14)) & _UINT32_MASK

    def random(self) -> float:
        return self.next_uint32() / _UINT32_RANGE

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        result = 0
        filled = 0
        while filled < k:
            result = (result << 32) | self.next_uint32()
            filled += 32
        return result >> (filled - k)

    def getstate(self):
        return (self._state, self.gauss_next)

    def setstate(self, state) -> None:
        self._state, self.gauss_next = state


def build_random_source(seed: Optional[int] = None) -> random.Random:
    """シードがあれば決定的な乱数源、なければOSエントロピーを使う"""
    if seed is None:
        return random.SystemRandom()
    return Mulberry32Random(seed)


def random_stream(seed: int) -> Iterator[float]:
    rng = Mulberry32Random(seed)
    while True:
        yield rng.random()


def fisher_yates(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy of items; the input sequence is left untouched."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = math.floor(rng.random() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def shuffle_with_seed(items: Sequence[T], seed: int) -> List[T]:
    return fisher_yates(items, Mulberry32Random(seed))


def derive_seed(text: str) -> int:
    return zlib.crc32(text.encode("utf-8")) & _UINT32_MASK
