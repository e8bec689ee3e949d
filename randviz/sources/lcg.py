"""Park-Miller linear congruential generator.

``state = state * 48271 mod (2**31 - 1)``, one byte per step taken from the
low eight bits.  Statistically weak on purpose: the periodic structure of
the low bits shows up clearly in the scatter and bit views.
"""

from __future__ import annotations

import threading
import time

import numpy as np

from randviz.sources.base import ByteSource

MULTIPLIER = 48271
MODULUS = 2147483647


def reduce_seed(raw: int) -> int:
    """Map any integer into the open interval (0, MODULUS).

    Zero is the generator's absorbing state, so it is moved to MODULUS - 1.
    """
    state = int(raw) % MODULUS
    if state <= 0:
        state += MODULUS - 1
    return state


class LCGGenerator:
    """Stateful LCG producing an endless byte sequence.

    The state persists between calls: two ``produce`` calls return
    consecutive stretches of the same sequence.  A lock guards the state
    so a generator shared by several server threads never hands out the
    same bytes twice.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._lock = threading.Lock()
        self._seed = 0
        self._state = 0
        self.reseed(time.time_ns() // 1_000_000 if seed is None else seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> int:
        return self._state

    def reseed(self, seed: int) -> None:
        """Restart the sequence from *seed*."""
        with self._lock:
            self._seed = reduce_seed(seed)
            self._state = self._seed

    def next_byte(self) -> int:
        with self._lock:
            self._state = (self._state * MULTIPLIER) % MODULUS
            return self._state & 0xFF

    def produce(self, count: int) -> np.ndarray:
        out = np.empty(count, dtype=np.uint8)
        with self._lock:
            state = self._state
            for i in range(count):
                state = (state * MULTIPLIER) % MODULUS
                out[i] = state & 0xFF
            self._state = state
        return out


class LCGSource(ByteSource):
    """Bytes from a single long-lived LCG."""

    name = "lcg"
    description = "Linear congruential generator (48271, 2^31-1), low byte of state"
    deterministic = True

    def __init__(self, seed: int | None = None, generator: LCGGenerator | None = None) -> None:
        self.generator = generator or LCGGenerator(seed)

    def is_available(self) -> bool:
        return True

    def reseed(self, seed: int) -> None:
        self.generator.reseed(seed)

    def _generate(self, count: int) -> np.ndarray:
        return self.generator.produce(count)
