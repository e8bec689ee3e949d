#!/usr/bin/env python3
"""Compare the three byte sources side by side.

Accumulates twenty 5000-byte frames from each source, prints the window
statistics, and saves a scatter plot per source.

Usage:
    pip install -e .
    python examples/python/compare_sources.py
"""

from randviz import ByteService, StatisticsAccumulator, __version__
from randviz.render import Canvas, render

print(f"randviz v{__version__}")

service = ByteService()
canvas = Canvas(512, 512)

for name in ("lcg", "math", "urandom"):
    acc = StatisticsAccumulator()
    frame = None
    for _ in range(20):
        frame = service.produce(name, 5000)
        acc.append(frame)

    s = acc.summarize()
    print(f"\n{name}:")
    print(f"  samples={s.samples:,} mean={s.mean:.2f} std={s.std_dev:.2f} entropy={s.entropy:.4f}")

    render("scatter", frame, acc.window(), canvas)
    canvas.save_png(f"scatter_{name}.png")
    print(f"  saved scatter_{name}.png")
