"""Bounded random integer sources used by the string generator.

Two implementations share the ``RandomSource`` protocol:

- ``SecureRandomSource`` draws from the operating system CSPRNG through the
  ``secrets`` module. It is the default.
- ``XorShiftRandomSource`` is Marsaglia's xorshift128. It is fast and
  seedable, but its output is predictable and must not be used for
  passwords, tokens or anything else security sensitive.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import Protocol, runtime_checkable

from rsgen.core.errors import RandomSourceUnavailableError

_LOGGER = logging.getLogger(__name__)

_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1
SEED_MAX = _MASK64


@runtime_checkable
class RandomSource(Protocol):
    def next_bounded(self, bound: int) -> int:
        """Return a uniformly distributed integer in ``[0, bound)``."""
        ...


def _validate_bound(bound: int) -> None:
    if isinstance(bound, bool) or not isinstance(bound, int):
        raise ValueError(f"bound must be an int, got {type(bound).__name__}")
    if bound < 1:
        raise ValueError(f"bound must be >= 1, got {bound}")


class SecureRandomSource:
    """Random source backed by the operating system entropy pool."""

    def __init__(self) -> None:
        try:
            secrets.token_bytes(1)
        except (NotImplementedError, OSError) as err:
            raise RandomSourceUnavailableError(
                f"secure random source is unavailable: {err}"
            ) from err
        _LOGGER.debug("Initialized secure random source")

    def next_bounded(self, bound: int) -> int:
        _validate_bound(bound)
        return secrets.randbelow(bound)


def _splitmix64(state: int) -> tuple[int, int]:
    state = (state + 0x9E3779B97F4A7C15) & _MASK64
    z = state
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return state, z ^ (z >> 31)


def _seed_from_time() -> int:
    return int(time.time()) & _MASK64


class XorShiftRandomSource:
    """Xorshift128 random source. Fast, reproducible, NOT secure."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = _seed_from_time()
        elif isinstance(seed, bool) or not isinstance(seed, int):
            raise ValueError(f"seed must be an int, got {type(seed).__name__}")
        elif not 0 <= seed <= SEED_MAX:
            raise ValueError(f"seed must be in [0, {SEED_MAX}], got {seed}")

        self.seed = seed
        state, high = _splitmix64(seed)
        _, low = _splitmix64(state)
        words = [
            (high >> 32) & _MASK32,
            high & _MASK32,
            (low >> 32) & _MASK32,
            low & _MASK32,
        ]
        # xorshift never leaves the all-zero state
        if not any(words):
            words[3] = 1
        self._x, self._y, self._z, self._w = words
        _LOGGER.debug("Initialized xorshift random source (seed=%d)", seed)

    def next_u32(self) -> int:
        t = self._x ^ ((self._x << 11) & _MASK32)
        self._x, self._y, self._z = self._y, self._z, self._w
        self._w = self._w ^ (self._w >> 19) ^ (t ^ (t >> 8))
        return self._w

    def next_bounded(self, bound: int) -> int:
        """Return an unbiased value in ``[0, bound)`` via rejection sampling."""
        _validate_bound(bound)
        n_words = max(1, ((bound - 1).bit_length() + 31) // 32)
        space = 1 << (32 * n_words)
        limit = space - space % bound
        while True:
            value = 0
            for _ in range(n_words):
                value = (value << 32) | self.next_u32()
            if value < limit:
                return value % bound


def make_random_source(
    *, fast: bool = False, seed: int | None = None
) -> RandomSource:
    """Build the random source for one invocation.

    ``seed`` only applies to the fast source; passing it without ``fast``
    raises ValueError.
    """
    if fast:
        return XorShiftRandomSource(seed)
    if seed is not None:
        raise ValueError("seed requires the fast random source")
    return SecureRandomSource()
