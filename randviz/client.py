"""HTTP client for a running randviz server."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from urllib.parse import urlencode

import numpy as np

from randviz.errors import NetworkError

logger = logging.getLogger(__name__)


class RandomClient:
    """Fetches byte frames from ``/api/random``.

    Usage::

        client = RandomClient("http://127.0.0.1:3000")
        frame = client.fetch("lcg", 5000)
    """

    def __init__(self, base_url: str = "http://127.0.0.1:3000", timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_json(self, path: str, params: dict | None = None) -> dict:
        url = f"{self.base_url}{path}"
        if params:
            url = f"{url}?{urlencode(params)}"
        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as resp:
                return json.loads(resp.read())
        except urllib.error.HTTPError as e:
            message = e.reason
            try:
                body = json.loads(e.read())
            except (OSError, ValueError):
                body = None
            if isinstance(body, dict):
                message = body.get("message", message)
            raise NetworkError(f"GET {path} failed with HTTP {e.code}: {message}") from e
        except (urllib.error.URLError, OSError) as e:
            raise NetworkError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise NetworkError(f"GET {path} returned invalid JSON: {e}") from e

    def fetch(self, source: str, count: int) -> np.ndarray:
        payload = self._get_json("/api/random", {"count": count, "source": source})
        try:
            values = np.asarray(payload["bytes"], dtype=np.int64)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise NetworkError(f"malformed payload from /api/random: {e}") from e
        if values.ndim != 1 or (len(values) and (values.min() < 0 or values.max() > 255)):
            raise NetworkError("malformed payload from /api/random: bytes must be a list of values in 0..255")
        return values.astype(np.uint8)

    def health(self) -> dict:
        return self._get_json("/api/health")

    def sources(self) -> list[dict]:
        return self._get_json("/api/sources")["sources"]
