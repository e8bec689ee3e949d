"""Server configuration.

Every field can be set from the command line or from a ``RANDVIZ_*``
environment variable (see ``randviz.cli``).
"""

from __future__ import annotations

from dataclasses import dataclass

from randviz.sources.device import DEFAULT_DEVICE

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_COUNT = 5000
MAX_COUNT = 100_000
DEFAULT_SOURCE = "lcg"


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    default_count: int = DEFAULT_COUNT
    max_count: int = MAX_COUNT
    device: str = DEFAULT_DEVICE

    def __post_init__(self) -> None:
        if self.max_count < 1:
            raise ValueError(f"max_count must be positive, got {self.max_count}")
        if not 1 <= self.default_count <= self.max_count:
            raise ValueError(
                f"default_count must be in [1, {self.max_count}], got {self.default_count}"
            )
