"""Host random device source (/dev/urandom, /dev/qrandom, ...)."""

from __future__ import annotations

import logging
import os

import numpy as np

from randviz.errors import SourceReadError
from randviz.sources.base import ByteSource

logger = logging.getLogger(__name__)

DEFAULT_DEVICE = "/dev/urandom"


class DeviceSource(ByteSource):
    """Reads raw bytes from an OS or hardware random device.

    A short read is an error, not a partial result: silently truncated
    frames would skew the accumulated statistics.
    """

    name = "urandom"
    description = "Host random-bit device"

    def __init__(self, path: str = DEFAULT_DEVICE) -> None:
        self.path = path

    def is_available(self) -> bool:
        return os.access(self.path, os.R_OK)

    def _generate(self, count: int) -> np.ndarray:
        try:
            with open(self.path, "rb") as dev:
                raw = dev.read(count)
        except OSError as e:
            raise SourceReadError(f"cannot read {self.path}: {e}") from e
        if len(raw) != count:
            logger.error("short read from %s: wanted %d bytes, got %d", self.path, count, len(raw))
            raise SourceReadError(
                f"short read from {self.path}: wanted {count} bytes, got {len(raw)}"
            )
        return np.frombuffer(raw, dtype=np.uint8).copy()
