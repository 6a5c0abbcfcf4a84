"""Domain-separated deterministic RNG using xxhash.

Every draw is a pure function of (WorldSeed, Domain, Key, Counter), so a
game replays identically from the same seed, commands and tick times
regardless of when the state was saved and reloaded.
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from conquest.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    No internal mutable state, so a single instance can be shared by the
    simulation thread and any reader.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, counter)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, counter: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, counter) < probability

    def choice(self, domain: Domain, key: int, counter: int, items: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence uniformly."""
        return items[self.next_int(domain, key, counter, 0, len(items) - 1)]
