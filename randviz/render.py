"""Rendering of byte streams onto an RGB pixel surface.

Four mutually exclusive views, each redrawing the whole canvas:

- ``bits``: one 8 px cell per bit, hue follows the byte position
- ``distribution``: 256-bar histogram of byte values
- ``scatter``: consecutive byte pairs plotted as (x, y)
- ``color``: one colored square per byte, hue follows the byte value

``distribution`` and ``scatter`` switch to the accumulated window once it
holds more than ``ACCUMULATED_PREFERENCE_THRESHOLD`` samples; ``bits`` and
``color`` only ever show the current frame.
"""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from randviz.errors import InvalidArgument
from randviz.stats import byte_histogram

ACCUMULATED_PREFERENCE_THRESHOLD = 1000

BACKGROUND = (15, 15, 26)
GRID = (40, 40, 52)
AXIS = (84, 84, 94)

BIT_CELL = 8
HIST_MARGIN = 20
SCATTER_PADDING = 40


class RenderMode(str, Enum):
    BITS = "bits"
    DISTRIBUTION = "distribution"
    SCATTER = "scatter"
    COLOR = "color"


MODE_NAMES: tuple[str, ...] = tuple(m.value for m in RenderMode)


def parse_mode(mode: str | RenderMode) -> RenderMode:
    try:
        return RenderMode(mode)
    except ValueError:
        raise InvalidArgument(
            f"unknown render mode {mode!r}, expected one of {', '.join(MODE_NAMES)}"
        ) from None


def hsl_to_rgb(hue, saturation, lightness) -> np.ndarray:
    """Vectorised HSL to RGB.

    *hue* in degrees, *saturation* and *lightness* in [0, 1].  Inputs
    broadcast; the result has shape ``(..., 3)`` and dtype uint8.
    """
    h = np.mod(np.asarray(hue, dtype=float), 360.0) / 60.0
    s = np.asarray(saturation, dtype=float)
    v = np.asarray(lightness, dtype=float)
    h, s, v = np.broadcast_arrays(h, s, v)

    c = (1.0 - np.abs(2.0 * v - 1.0)) * s
    x = c * (1.0 - np.abs(np.mod(h, 2.0) - 1.0))
    m = v - c / 2.0
    z = np.zeros_like(c)

    sector = np.floor(h).astype(int)
    r = np.choose(sector, [c, x, z, z, x, c], mode="clip")
    g = np.choose(sector, [x, c, c, x, z, z], mode="clip")
    b = np.choose(sector, [z, z, x, c, c, x], mode="clip")
    rgb = np.stack([r + m, g + m, b + m], axis=-1)
    return np.clip(np.round(rgb * 255.0), 0, 255).astype(np.uint8)


class Canvas:
    """An RGB drawing surface backed by a ``(height, width, 3)`` uint8 array."""

    def __init__(self, width: int = 800, height: int = 600, background=BACKGROUND) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"canvas must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.background = np.asarray(background, dtype=np.uint8)
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.clear()

    def clear(self) -> None:
        self.pixels[:, :] = self.background

    def fill_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        if w <= 0 or h <= 0:
            return
        x0, y0 = int(x), int(y)
        x1 = max(int(x + w), x0 + 1)
        y1 = max(int(y + h), y0 + 1)
        x0, x1 = max(x0, 0), min(x1, self.width)
        y0, y1 = max(y0, 0), min(y1, self.height)
        if x0 < x1 and y0 < y1:
            self.pixels[y0:y1, x0:x1] = color

    def hline(self, y: float, x0: float = 0, x1: float | None = None, color=GRID, thickness: int = 1) -> None:
        x1 = self.width if x1 is None else x1
        self.fill_rect(x0, y, x1 - x0, thickness, color)

    def vline(self, x: float, y0: float = 0, y1: float | None = None, color=GRID, thickness: int = 1) -> None:
        y1 = self.height if y1 is None else y1
        self.fill_rect(x, y0, thickness, y1 - y0, color)

    def plot(self, xs, ys, colors, radius: int = 1) -> None:
        """Draw square dots of side ``2 * radius + 1`` centred on each point."""
        xs = np.round(np.asarray(xs, dtype=float)).astype(int)
        ys = np.round(np.asarray(ys, dtype=float)).astype(int)
        colors = np.asarray(colors, dtype=np.uint8)
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                px, py = xs + dx, ys + dy
                ok = (px >= 0) & (px < self.width) & (py >= 0) & (py < self.height)
                self.pixels[py[ok], px[ok]] = colors[ok]

    def to_image(self):
        from PIL import Image

        return Image.fromarray(self.pixels)

    def save_png(self, path: str) -> None:
        self.to_image().save(path, format="PNG")


# ── views ──


def draw_bits(canvas: Canvas, data: np.ndarray) -> None:
    n_bytes = len(data)
    cols = canvas.width // BIT_CELL
    rows = canvas.height // BIT_CELL
    total = min(n_bytes * 8, cols * rows)
    if total == 0:
        return

    bits = np.unpackbits(np.asarray(data, dtype=np.uint8))[:total]
    byte_index = np.arange(total) // 8
    hue = byte_index / n_bytes * 360.0
    colors = hsl_to_rgb(hue, 0.7, np.where(bits == 1, 0.7, 0.2))

    cells = np.zeros((rows * cols, 3), dtype=np.uint8)
    cells[:total] = colors
    filled = np.zeros(rows * cols, dtype=bool)
    filled[:total] = True

    def expand(a):
        a = a.reshape(rows, cols, *a.shape[1:])
        return np.repeat(np.repeat(a, BIT_CELL, axis=0), BIT_CELL, axis=1)

    img = expand(cells)
    mask = expand(filled)
    # one pixel gap on the right and bottom of every cell
    yy, xx = np.indices(mask.shape)
    mask &= (yy % BIT_CELL != BIT_CELL - 1) & (xx % BIT_CELL != BIT_CELL - 1)

    region = canvas.pixels[: rows * BIT_CELL, : cols * BIT_CELL]
    region[mask] = img[mask]


def draw_distribution(canvas: Canvas, data: np.ndarray) -> None:
    hist = byte_histogram(data)
    max_count = int(hist.max()) if len(hist) else 0
    if max_count == 0:
        return

    w, h = canvas.width, canvas.height
    plot_h = h - 2 * HIST_MARGIN
    baseline = h - HIST_MARGIN
    for i in range(6):
        canvas.hline(baseline - i * plot_h / 5)

    bar_width = w / 256
    scale = plot_h / max_count
    colors = hsl_to_rgb(np.arange(256) / 256 * 280.0, 0.7, 0.5)
    for i, count in enumerate(hist):
        height = count * scale
        canvas.fill_rect(i * bar_width, baseline - height, max(bar_width - 0.5, 1), height, colors[i])


def draw_scatter(canvas: Canvas, data: np.ndarray) -> None:
    w, h = canvas.width, canvas.height
    pad = SCATTER_PADDING
    plot_w = w - 2 * pad
    plot_h = h - 2 * pad

    for i in range(5):
        canvas.vline(pad + i * plot_w / 4, pad, h - pad)
        canvas.hline(pad + i * plot_h / 4, pad, w - pad)
    canvas.vline(pad, pad, h - pad, color=AXIS, thickness=2)
    canvas.hline(h - pad, pad, w - pad, color=AXIS, thickness=2)

    data = np.asarray(data, dtype=float)
    n = len(data) - len(data) % 2
    if n == 0:
        return
    xs = pad + data[0:n:2] / 255 * plot_w
    ys = h - pad - data[1:n:2] / 255 * plot_h
    hue = np.arange(0, n, 2) / len(data) * 360.0
    canvas.plot(xs, ys, hsl_to_rgb(hue, 0.8, 0.6), radius=1)


def draw_color(canvas: Canvas, data: np.ndarray) -> None:
    n = len(data)
    if n == 0:
        return
    grid = math.ceil(math.sqrt(n))
    cell = min(canvas.width, canvas.height) / grid
    off_x = (canvas.width - grid * cell) / 2
    off_y = (canvas.height - grid * cell) / 2

    values = np.asarray(data, dtype=np.uint8).astype(int)
    colors = hsl_to_rgb(values / 255 * 360.0, (60 + values % 40) / 100, (40 + values % 30) / 100)
    side = max(cell - 1, 1)
    for i in range(n):
        row, col = divmod(i, grid)
        canvas.fill_rect(off_x + col * cell, off_y + row * cell, side, side, colors[i])


_VIEWS = {
    RenderMode.BITS: draw_bits,
    RenderMode.DISTRIBUTION: draw_distribution,
    RenderMode.SCATTER: draw_scatter,
    RenderMode.COLOR: draw_color,
}


def select_samples(mode: str | RenderMode, frame: np.ndarray, window: np.ndarray | None) -> np.ndarray:
    """Pick the data a view draws: the window for histogram and scatter once
    it holds more than ``ACCUMULATED_PREFERENCE_THRESHOLD`` samples, else the frame."""
    mode = parse_mode(mode)
    if (
        mode in (RenderMode.DISTRIBUTION, RenderMode.SCATTER)
        and window is not None
        and len(window) > ACCUMULATED_PREFERENCE_THRESHOLD
    ):
        return window
    return frame


def render(mode: str | RenderMode, frame: np.ndarray, window: np.ndarray | None, canvas: Canvas) -> None:
    """Clear *canvas* and draw *mode* from scratch."""
    mode = parse_mode(mode)
    data = np.asarray(select_samples(mode, frame, window), dtype=np.uint8)
    canvas.clear()
    _VIEWS[mode](canvas, data)
