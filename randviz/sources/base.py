"""Abstract base class for all byte sources."""

from abc import ABC, abstractmethod

import numpy as np

from randviz.errors import InvalidArgument


class ByteSource(ABC):
    """Base class for a byte generator.

    Every source declares a ``name`` (the identifier clients pass as
    ``source=``) and implements ``is_available`` and ``_generate``.
    ``produce`` validates the count and is what callers use.
    """

    name: str = "unnamed"
    description: str = ""
    deterministic: bool = False

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the source can operate on this machine."""
        ...

    @abstractmethod
    def _generate(self, count: int) -> np.ndarray:
        """Return exactly *count* uint8 values."""
        ...

    def produce(self, count: int) -> np.ndarray:
        """Produce a fresh byte stream.

        Parameters
        ----------
        count:
            Number of bytes wanted. Must be a positive integer; clamping to
            a server-side cap happens before this point.

        Returns
        -------
        numpy.ndarray
            1-D uint8 array of exactly *count* values.
        """
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 1:
            raise InvalidArgument(f"count must be a positive integer, got {count!r}")
        return self._generate(int(count))

    def entropy_quality(self, n_samples: int = 4096) -> dict:
        """Produce a sample and summarise it."""
        from randviz import stats

        data = self.produce(n_samples)
        return {
            "label": self.name,
            "samples": len(data),
            "unique_values": int(len(np.unique(data))),
            "mean": round(stats.mean(data), 4),
            "std_dev": round(stats.std_dev(data), 4),
            "shannon_entropy": round(stats.shannon_entropy(data), 4),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
