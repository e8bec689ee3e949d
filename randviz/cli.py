"""CLI for randviz."""

from __future__ import annotations

import logging
import sys
import time

import click

from randviz import __version__
from randviz.config import (
    DEFAULT_COUNT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_SOURCE,
    MAX_COUNT,
    ServerConfig,
)
from randviz.errors import RandvizError
from randviz.render import MODE_NAMES
from randviz.sources import SOURCE_NAMES
from randviz.sources.device import DEFAULT_DEVICE

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__)
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default="INFO",
              envvar="RANDVIZ_LOG_LEVEL", show_default=True, help="Logging verbosity.")
def main(log_level: str) -> None:
    """randviz — see what your random bytes look like."""
    _configure_logging(log_level.upper())


# ────────────────────────────────────────────────────────────
# Server — HTTP API
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default=DEFAULT_HOST, envvar="RANDVIZ_HOST", show_default=True, help="Bind address.")
@click.option("--port", default=DEFAULT_PORT, envvar="RANDVIZ_PORT", show_default=True, help="Port to listen on.")
@click.option("--default-count", default=DEFAULT_COUNT, envvar="RANDVIZ_DEFAULT_COUNT", show_default=True,
              help="Bytes per request when count is absent.")
@click.option("--max-count", default=MAX_COUNT, envvar="RANDVIZ_MAX_COUNT", show_default=True,
              help="Larger counts are clamped to this value.")
@click.option("--device", default=DEFAULT_DEVICE, envvar="RANDVIZ_DEVICE", show_default=True,
              help="Random device behind the 'urandom' source.")
def server(host: str, port: int, default_count: int, max_count: int, device: str) -> None:
    """Start the HTTP byte server.

    Endpoints:

        GET /api/random?count=N&source=urandom|lcg|math

        GET /api/health

        GET /api/sources
    """
    from randviz.http_server import run_server
    from randviz.service import ByteService

    try:
        config = ServerConfig(host=host, port=port, default_count=default_count,
                              max_count=max_count, device=device)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    click.echo(f"randviz server v{__version__}")
    click.echo(f"   Listening on http://{host}:{port}")
    click.echo(f"   API: /api/random?count=N&source={'|'.join(SOURCE_NAMES)}")
    click.echo()
    run_server(ByteService(config), host=host, port=port)


# ────────────────────────────────────────────────────────────
# Monitor — live visualizer against a server
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--url", default=f"http://{DEFAULT_HOST}:{DEFAULT_PORT}", envvar="RANDVIZ_URL",
              show_default=True, help="Server base URL.")
@click.option("--source", type=click.Choice(SOURCE_NAMES), default=DEFAULT_SOURCE, show_default=True)
@click.option("--mode", type=click.Choice(MODE_NAMES), default="bits", show_default=True)
@click.option("--count", default=DEFAULT_COUNT, type=click.IntRange(min=1), show_default=True, help="Bytes per frame.")
@click.option("--interval", default=0.5, type=float, show_default=True,
              help="Seconds between the end of one tick and the start of the next.")
@click.option("--timeout", default=5.0, type=float, show_default=True, help="Per-request timeout in seconds.")
@click.option("--ticks", default=0, type=int, help="Stop after this many ticks (0 = run until Ctrl+C).")
def monitor(url: str, source: str, mode: str, count: int, interval: float, timeout: float, ticks: int) -> None:
    """Live terminal visualizer.

    Examples:

        randviz monitor --source lcg --mode scatter

        randviz monitor --url http://192.168.0.27:3000 --source urandom
    """
    from randviz.client import RandomClient
    from randviz.monitor import Visualizer

    client = RandomClient(url, timeout=timeout)
    viz = Visualizer(client.fetch, source=source, mode=mode, count=count, interval=interval)
    viz.run(max_ticks=ticks or None)
    s = viz.statistics
    click.echo(f"Ticks: {viz.ticks} ok, {viz.failures} failed")
    if s.available:
        click.echo(f"  mean={s.mean:.2f} std={s.std_dev:.2f} entropy={s.entropy:.4f} samples={s.samples:,}")


# ────────────────────────────────────────────────────────────
# Local tools (no server needed)
# ────────────────────────────────────────────────────────────


@main.command()
@click.option("--source", type=click.Choice(SOURCE_NAMES), default=DEFAULT_SOURCE, show_default=True)
@click.option("--count", default=DEFAULT_COUNT, type=click.IntRange(min=1), show_default=True)
@click.option("--frames", default=1, type=click.IntRange(min=1), show_default=True, help="Frames to accumulate.")
@click.option("--seed", default=None, type=int, help="Seed for lcg and math.")
@click.option("--device", default=DEFAULT_DEVICE, envvar="RANDVIZ_DEVICE", show_default=True)
def fetch(source: str, count: int, frames: int, seed: int | None, device: str) -> None:
    """Produce bytes locally and print summary statistics."""
    from randviz.accumulator import StatisticsAccumulator

    src = _make_source(source, seed, device)
    acc = StatisticsAccumulator()
    t0 = time.monotonic()
    try:
        for _ in range(frames):
            acc.append(src.produce(count))
    except RandvizError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    elapsed = time.monotonic() - t0

    s = acc.summarize()
    click.echo(f"Source: {source}")
    click.echo(f"  Samples:         {s.samples:,}")
    click.echo(f"  Mean:            {s.mean:.4f}")
    click.echo(f"  Std dev:         {s.std_dev:.4f}")
    click.echo(f"  Shannon entropy: {s.entropy:.4f} / 8.0 bits")
    click.echo(f"  Time:            {elapsed:.3f}s")


@main.command()
@click.option("--source", type=click.Choice(SOURCE_NAMES), default=DEFAULT_SOURCE, show_default=True)
@click.option("--mode", type=click.Choice(MODE_NAMES), default="scatter", show_default=True)
@click.option("--count", default=DEFAULT_COUNT, type=click.IntRange(min=1), show_default=True)
@click.option("--frames", default=1, type=click.IntRange(min=1), show_default=True, help="Frames to accumulate before drawing.")
@click.option("--seed", default=None, type=int, help="Seed for lcg and math.")
@click.option("--width", default=800, show_default=True)
@click.option("--height", default=600, show_default=True)
@click.option("--device", default=DEFAULT_DEVICE, envvar="RANDVIZ_DEVICE", show_default=True)
@click.option("--output", "output_path", default=None, help="PNG path (default: randviz_<source>_<mode>.png).")
def snapshot(source: str, mode: str, count: int, frames: int, seed: int | None,
             width: int, height: int, device: str, output_path: str | None) -> None:
    """Render a view to a PNG file."""
    from randviz.accumulator import StatisticsAccumulator
    from randviz.render import Canvas, render

    src = _make_source(source, seed, device)
    acc = StatisticsAccumulator()
    frame = None
    try:
        for _ in range(frames):
            frame = src.produce(count)
            acc.append(frame)
    except RandvizError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    canvas = Canvas(width, height)
    render(mode, frame, acc.window(), canvas)
    output_path = output_path or f"randviz_{source}_{mode}.png"
    canvas.save_png(output_path)
    s = acc.summarize()
    click.echo(f"Saved {mode} view of {s.samples:,} {source} bytes to {output_path}")
    click.echo(f"  entropy={s.entropy:.4f} mean={s.mean:.2f} std={s.std_dev:.2f}")


@main.command()
@click.option("--device", default=DEFAULT_DEVICE, envvar="RANDVIZ_DEVICE", show_default=True)
def sources(device: str) -> None:
    """List byte sources and a quick quality sample of each."""
    from randviz.sources import ALL_SOURCES

    click.echo(f"{'Source':<10} {'OK':>3} {'Entropy':>8} {'Mean':>8} {'Std':>7}  Description")
    click.echo("-" * 72)
    for cls in ALL_SOURCES:
        src = _make_source(cls.name, None, device)
        if not src.is_available():
            click.echo(f"{src.name:<10} {'✗':>3} {'-':>8} {'-':>8} {'-':>7}  {src.description}")
            continue
        try:
            q = src.entropy_quality()
        except RandvizError as e:
            click.echo(f"{src.name:<10} {'✗':>3}  error: {e}")
            continue
        click.echo(
            f"{src.name:<10} {'✓':>3} {q['shannon_entropy']:>8.4f} "
            f"{q['mean']:>8.2f} {q['std_dev']:>7.2f}  {src.description}"
        )


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────


def _make_source(name: str, seed: int | None, device: str):
    from randviz.sources import create_source

    if name == "urandom":
        return create_source(name, path=device)
    return create_source(name, seed=seed)
