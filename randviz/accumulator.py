"""Sliding window of recently seen bytes with summary statistics.

The window is a fixed-size numpy ring buffer: appends overwrite the oldest
samples once capacity is reached, so no reallocation happens per fetch.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import numpy as np

from randviz import stats

MAX_ACCUMULATED_SAMPLES = 100_000


@dataclass(frozen=True)
class SummaryStatistics:
    """Statistics derived from the accumulated window."""

    samples: int
    mean: float
    std_dev: float
    entropy: float

    @classmethod
    def empty(cls) -> SummaryStatistics:
        """Result reported when there is no data."""
        return cls(samples=0, mean=0.0, std_dev=0.0, entropy=0.0)

    @property
    def available(self) -> bool:
        return self.samples > 0

    def as_dict(self) -> dict:
        return asdict(self)


class StatisticsAccumulator:
    """Bounded FIFO of the most recent bytes from a single source.

    Usage::

        acc = StatisticsAccumulator()
        acc.append(frame)
        acc.summarize().entropy
    """

    def __init__(self, capacity: int = MAX_ACCUMULATED_SAMPLES) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._buf = np.zeros(capacity, dtype=np.uint8)
        self._head = 0  # next write position
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def append(self, data: np.ndarray | bytes) -> None:
        """Add *data* after the newest sample, dropping the oldest overflow."""
        if isinstance(data, (bytes, bytearray)):
            data = np.frombuffer(data, dtype=np.uint8)
        data = np.asarray(data, dtype=np.uint8).flatten()
        n = len(data)
        if n == 0:
            return

        cap = self._capacity
        if n >= cap:
            self._buf[:] = data[-cap:]
            self._head = 0
            self._size = cap
            return

        end = self._head + n
        if end <= cap:
            self._buf[self._head:end] = data
        else:
            split = cap - self._head
            self._buf[self._head:] = data[:split]
            self._buf[:n - split] = data[split:]
        self._head = end % cap
        self._size = min(self._size + n, cap)

    def reset(self) -> None:
        """Forget everything.  Call when the upstream source changes."""
        self._head = 0
        self._size = 0

    def window(self) -> np.ndarray:
        """Copy of the window, oldest sample first."""
        if self._size < self._capacity:
            return self._buf[:self._size].copy()
        return np.concatenate((self._buf[self._head:], self._buf[:self._head]))

    def summarize(self) -> SummaryStatistics:
        if self._size == 0:
            return SummaryStatistics.empty()
        data = self.window()
        return SummaryStatistics(
            samples=len(data),
            mean=stats.mean(data),
            std_dev=stats.std_dev(data),
            entropy=stats.shannon_entropy(data),
        )
