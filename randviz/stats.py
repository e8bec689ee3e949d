"""Descriptive statistics for byte streams."""

from __future__ import annotations

import numpy as np


def byte_histogram(data: np.ndarray) -> np.ndarray:
    """256-bin frequency count of byte values."""
    data = np.asarray(data, dtype=np.uint8).flatten()
    return np.bincount(data, minlength=256)


def mean(data: np.ndarray) -> float:
    data = np.asarray(data, dtype=float).flatten()
    if len(data) == 0:
        return 0.0
    return float(np.mean(data))


def std_dev(data: np.ndarray) -> float:
    """Population standard deviation (divides by N, not N - 1)."""
    data = np.asarray(data, dtype=float).flatten()
    if len(data) == 0:
        return 0.0
    return float(np.sqrt(np.mean((data - np.mean(data)) ** 2)))


def shannon_entropy(data: np.ndarray) -> float:
    """Shannon entropy in bits for uint8 data.  8.0 means uniform over 256 values."""
    counts = byte_histogram(data)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(max(-np.sum(probs * np.log2(probs)), 0.0))
