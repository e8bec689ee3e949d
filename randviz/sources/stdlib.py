"""Python ``random`` module source."""

from __future__ import annotations

import random

import numpy as np

from randviz.sources.base import ByteSource


class StdlibRandomSource(ByteSource):
    """``floor(random() * 256)`` per byte from a Mersenne Twister."""

    name = "math"
    description = "Python random.random() scaled to a byte"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def is_available(self) -> bool:
        return True

    def _generate(self, count: int) -> np.ndarray:
        rand = self._rng.random
        return np.fromiter((int(rand() * 256) for _ in range(count)), dtype=np.uint8, count=count)
