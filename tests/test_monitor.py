"""Tests for the live visualizer loop."""

import io

import numpy as np
import pytest
from rich.console import Console

from randviz.errors import InvalidArgument, NetworkError
from randviz.monitor import Visualizer, _hex_dump, _sparkline, _surface_preview
from randviz.render import Canvas, RenderMode
from randviz.service import ByteService


class FakeFetcher:
    """Local service standing in for the HTTP client; can be told to fail."""

    def __init__(self):
        self.service = ByteService()
        self.calls = []
        self.fail = False

    def __call__(self, source, count):
        self.calls.append((source, count))
        if self.fail:
            raise NetworkError("connection refused")
        return self.service.produce(source, count)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def viz(fetcher):
    return Visualizer(fetcher, source="lcg", mode="bits", count=500, interval=0, canvas=Canvas(64, 32))


class TestTick:
    def test_tick_updates_everything(self, viz, fetcher):
        assert viz.tick() is True
        assert fetcher.calls == [("lcg", 500)]
        assert len(viz.frame) == 500
        assert len(viz.accumulator) == 500
        assert viz.statistics.samples == 500
        assert 0 < viz.statistics.entropy <= 8.0
        assert viz.ticks == 1

    def test_statistics_cover_accumulated_window(self, viz):
        for _ in range(3):
            viz.tick()
        assert viz.statistics.samples == 1500

    def test_failed_fetch_skips_tick(self, viz, fetcher):
        viz.tick()
        before = viz.statistics
        fetcher.fail = True
        assert viz.tick() is False
        assert viz.failures == 1
        assert viz.ticks == 1
        assert viz.statistics == before
        fetcher.fail = False
        assert viz.tick() is True

    def test_window_capacity(self, fetcher):
        v = Visualizer(fetcher, count=400, capacity=1000, canvas=Canvas(16, 16))
        for _ in range(5):
            v.tick()
        assert len(v.accumulator) == 1000


class TestSwitching:
    def test_source_switch_resets_window(self, viz, fetcher):
        viz.tick()
        viz.set_source("math")
        assert len(viz.accumulator) == 0
        assert not viz.statistics.available
        viz.tick()
        assert fetcher.calls[-1] == ("math", 500)
        assert viz.statistics.samples == 500

    def test_same_source_keeps_window(self, viz):
        viz.tick()
        viz.set_source("lcg")
        assert len(viz.accumulator) == 500

    def test_mode_switch_keeps_window(self, viz):
        viz.tick()
        viz.set_mode("scatter")
        assert viz.mode is RenderMode.SCATTER
        assert len(viz.accumulator) == 500

    def test_unknown_source(self, viz):
        with pytest.raises(InvalidArgument):
            viz.set_source("nope")

    def test_unknown_mode(self, viz):
        with pytest.raises(InvalidArgument):
            viz.set_mode("nope")


class TestRun:
    def test_run_stops_after_max_ticks(self, viz):
        console = Console(file=io.StringIO(), force_terminal=False, width=100)
        viz.run(max_ticks=3, console=console)
        assert viz.ticks == 3

    def test_run_continues_past_failures(self, viz, fetcher):
        fetcher.fail = True
        console = Console(file=io.StringIO(), force_terminal=False, width=100)
        viz.run(max_ticks=2, console=console)
        assert viz.failures == 2
        assert viz.ticks == 0


class TestHelpers:
    def test_sparkline(self):
        assert _sparkline([]) == ""
        assert len(_sparkline([1.0, 2.0, 3.0])) == 3

    def test_hex_dump(self):
        text = _hex_dump(np.array([0, 255, 16, 32], dtype=np.uint8))
        assert text.plain.replace(" ", "") == "00ff1020"

    def test_surface_preview_size(self):
        text = _surface_preview(Canvas(100, 50), cols=10, rows=4)
        lines = text.plain.split("\n")
        assert len(lines) == 4
        assert all(len(line) == 10 for line in lines)
