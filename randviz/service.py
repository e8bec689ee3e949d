"""Source selection and request handling, independent of HTTP.

``ByteService`` owns one instance of every source for its own lifetime.
The LCG therefore continues where the previous request stopped, for every
client of the same service.  That sharing is deliberate (one visual stream
per server); per-client isolation would mean one service per client.
"""

from __future__ import annotations

import logging
import threading
import time

from randviz.config import ServerConfig
from randviz.sources import SOURCE_NAMES, ByteSource, create_source
from randviz.sources.device import DeviceSource

logger = logging.getLogger(__name__)


class ByteService:
    """Hands out byte frames from named sources.

    Usage::

        svc = ByteService()
        payload = svc.fetch("lcg", 5000)
    """

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config = config or ServerConfig()
        self._sources: dict[str, ByteSource] = {}
        self._source_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()  # guards the two dicts

    def source(self, name: str) -> ByteSource:
        """Return the long-lived source for *name*, creating it on first use."""
        with self._lock:
            src = self._sources.get(name)
            if src is None:
                options = {"path": self.config.device} if name == DeviceSource.name else {}
                src = create_source(name, **options)
                self._sources[name] = src
                self._source_locks[name] = threading.Lock()
                logger.debug("created source %r", src)
            return src

    def resolve_count(self, raw: int | str | None) -> int:
        """Saturating clamp of a requested count.

        Missing, non-numeric and non-positive values fall back to the
        default; anything above the cap becomes the cap without an error.
        """
        try:
            count = int(raw)
        except (TypeError, ValueError):
            return self.config.default_count
        if count < 1:
            return self.config.default_count
        return min(count, self.config.max_count)

    def produce(self, name: str, count: int | str | None = None):
        src = self.source(name)
        n = self.resolve_count(count)
        # calls are serialized per source, not across sources
        with self._source_locks[name]:
            return src.produce(n)

    def fetch(self, name: str, count: int | str | None = None) -> dict:
        """JSON-ready payload for one request."""
        data = self.produce(name, count)
        return {
            "bytes": data.tolist(),
            "count": len(data),
            "source": name,
            "timestamp": int(time.time() * 1000),
        }

    def describe_sources(self) -> list[dict]:
        out = []
        for name in SOURCE_NAMES:
            src = self.source(name)
            out.append({
                "name": name,
                "description": src.description,
                "available": src.is_available(),
                "deterministic": src.deterministic,
            })
        return out
