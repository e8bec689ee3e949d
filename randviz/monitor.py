"""Live visualizer: fetch, accumulate, render, summarise, repeat.

Each tick runs to completion before the next one is scheduled; the
``interval`` delay starts after the tick finishes, so slow renders stretch
the cadence instead of piling up.  A failed fetch is logged and the tick is
skipped.  There is no retry and no backoff.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable

import numpy as np

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from randviz.accumulator import MAX_ACCUMULATED_SAMPLES, StatisticsAccumulator, SummaryStatistics
from randviz.errors import InvalidArgument, NetworkError
from randviz.render import Canvas, RenderMode, parse_mode, render
from randviz.sources import SOURCE_NAMES

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, int], np.ndarray]

# ── Sparkline characters ──
SPARK = "▁▂▃▄▅▆▇█"


def _sparkline(values: list[float], width: int = 30) -> str:
    """Render a sparkline string from values."""
    if not values:
        return ""
    recent = values[-width:]
    mn, mx = min(recent), max(recent)
    rng = mx - mn if mx > mn else 1.0
    return "".join(SPARK[min(int((v - mn) / rng * 7), 7)] for v in recent)


def _entropy_bar(value: float, max_val: float = 8.0, width: int = 16) -> Text:
    """Colored bar for entropy value."""
    ratio = min(value / max_val, 1.0)
    filled = int(ratio * width)
    if ratio > 0.8:
        color = "green"
    elif ratio > 0.5:
        color = "yellow"
    elif ratio > 0.2:
        color = "red"
    else:
        color = "bright_black"
    return Text("█" * filled + "░" * (width - filled), style=color)


def _hex_dump(data: np.ndarray, width: int = 32, lines: int = 2) -> Text:
    """Colorized hex dump of the first bytes of a frame."""
    text = Text()
    shown = bytes(np.asarray(data[: width * lines], dtype=np.uint8))
    for i, b in enumerate(shown):
        if b < 32:
            style = "bright_black"
        elif b < 96:
            style = "blue"
        elif b < 160:
            style = "green"
        elif b < 224:
            style = "yellow"
        else:
            style = "red"
        text.append(f"{b:02x}", style=style)
        if (i + 1) % 2 == 0:
            text.append(" ")
        if (i + 1) % width == 0 and i < len(shown) - 1:
            text.append("\n")
    return text


def _surface_preview(canvas: Canvas, cols: int = 72, rows: int = 18) -> Text:
    """Downsample the canvas to terminal cells using upper half blocks."""
    ys = np.linspace(0, canvas.height - 1, rows * 2).astype(int)
    xs = np.linspace(0, canvas.width - 1, cols).astype(int)
    sampled = canvas.pixels[np.ix_(ys, xs)]
    text = Text()
    for r in range(rows):
        top, bottom = sampled[2 * r], sampled[2 * r + 1]
        for c in range(cols):
            fg = "rgb({},{},{})".format(*top[c])
            bg = "rgb({},{},{})".format(*bottom[c])
            text.append("▀", style=f"{fg} on {bg}")
        if r < rows - 1:
            text.append("\n")
    return text


class Visualizer:
    """Single-stream consumer of a byte source.

    Parameters
    ----------
    fetch:
        ``fetch(source, count)`` returning a uint8 array; raises
        ``NetworkError`` on failure. ``RandomClient.fetch`` fits.
    interval:
        Seconds to wait after a tick completes before starting the next.
    """

    def __init__(
        self,
        fetch: Fetcher,
        source: str = "lcg",
        mode: str | RenderMode = RenderMode.BITS,
        count: int = 5000,
        interval: float = 0.5,
        canvas: Canvas | None = None,
        capacity: int = MAX_ACCUMULATED_SAMPLES,
    ) -> None:
        self._fetch = fetch
        self.source = self._check_source(source)
        self.mode = parse_mode(mode)
        self.count = count
        self.interval = interval
        self.canvas = canvas or Canvas(576, 288)
        self.accumulator = StatisticsAccumulator(capacity)
        self.frame = np.empty(0, dtype=np.uint8)
        self.statistics = SummaryStatistics.empty()
        self.ticks = 0
        self.failures = 0
        self._entropy_history: deque = deque(maxlen=60)
        self._stop = threading.Event()

    @staticmethod
    def _check_source(name: str) -> str:
        if name not in SOURCE_NAMES:
            raise InvalidArgument(f"unknown source {name!r}, expected one of {', '.join(SOURCE_NAMES)}")
        return name

    def set_source(self, name: str) -> None:
        """Switch sources.  Statistics never mix two sources, so the window is cleared."""
        name = self._check_source(name)
        if name == self.source:
            return
        logger.info("switching source %s -> %s", self.source, name)
        self.source = name
        self.accumulator.reset()
        self.statistics = SummaryStatistics.empty()
        self._entropy_history.clear()

    def set_mode(self, mode: str | RenderMode) -> None:
        self.mode = parse_mode(mode)

    def tick(self) -> bool:
        """Run one fetch/render/statistics cycle.  Returns False if it was skipped."""
        try:
            frame = self._fetch(self.source, self.count)
        except NetworkError as e:
            self.failures += 1
            logger.warning("fetch from %s failed, skipping tick: %s", self.source, e)
            return False

        self.frame = np.asarray(frame, dtype=np.uint8)
        self.accumulator.append(self.frame)
        render(self.mode, self.frame, self.accumulator.window(), self.canvas)
        self.statistics = self.accumulator.summarize()
        self._entropy_history.append(self.statistics.entropy)
        self.ticks += 1
        return True

    def stop(self) -> None:
        self._stop.set()

    # ── display ──

    def _build_stats_table(self) -> Table:
        s = self.statistics
        table = Table(show_header=False, border_style="bright_black", expand=True, padding=(0, 1))
        table.add_column("Metric", style="bold", ratio=1)
        table.add_column("Value", justify="right", ratio=1)
        table.add_column("", ratio=2)
        if not s.available:
            table.add_row("Samples", "0", Text("[no data]", style="dim"))
            return table
        color = "green" if s.entropy > 7.5 else "yellow" if s.entropy > 5 else "red"
        table.add_row("Mean", f"{s.mean:.2f}", Text("ideal 127.50", style="dim"))
        table.add_row("Std dev", f"{s.std_dev:.2f}", Text("ideal 73.90", style="dim"))
        table.add_row("Entropy", f"[{color}]{s.entropy:.2f}[/]", _entropy_bar(s.entropy))
        table.add_row("Samples", f"{s.samples:,}", Text(_sparkline(list(self._entropy_history)), style="cyan"))
        return table

    def _build_display(self) -> Group:
        header = Text()
        header.append("  RANDVIZ", style="bold magenta")
        header.append(f"  │  source {self.source}", style="cyan")
        header.append(f"  │  mode {self.mode.value}", style="cyan")
        header.append(f"  │  ticks {self.ticks}  failed {self.failures}", style="dim")
        if len(self.frame):
            bytes_panel = _hex_dump(self.frame)
        else:
            bytes_panel = Text("[waiting for first frame...]", style="dim")
        return Group(
            Panel(header, border_style="bright_black"),
            Panel(_surface_preview(self.canvas), title=self.mode.value, border_style="magenta"),
            Panel(self._build_stats_table(), title="Statistics", border_style="green"),
            Panel(bytes_panel, title="Latest bytes", border_style="blue"),
        )

    def run(self, max_ticks: int | None = None, console: Console | None = None) -> None:
        """Tick until stopped, interrupted, or *max_ticks* attempts have run."""
        console = console or Console()
        self._stop.clear()
        attempts = 0
        try:
            with Live(self._build_display(), console=console, refresh_per_second=4) as live:
                while not self._stop.is_set():
                    t0 = time.monotonic()
                    self.tick()
                    attempts += 1
                    live.update(self._build_display())
                    logger.debug("tick %d took %.3fs", attempts, time.monotonic() - t0)
                    if max_ticks is not None and attempts >= max_ticks:
                        break
                    self._stop.wait(self.interval)
        except KeyboardInterrupt:
            pass
        finally:
            self._stop.set()
