"""Tests for the rendering views."""

import numpy as np
import pytest
from PIL import Image

from randviz.errors import InvalidArgument
from randviz.render import (
    ACCUMULATED_PREFERENCE_THRESHOLD,
    BACKGROUND,
    BIT_CELL,
    Canvas,
    RenderMode,
    hsl_to_rgb,
    render,
    select_samples,
)


def _frame(*values):
    return np.array(values, dtype=np.uint8)


class TestSelectSamples:
    frame = np.zeros(10, dtype=np.uint8)

    @pytest.mark.parametrize("mode", ["distribution", "scatter"])
    def test_prefers_window_above_threshold(self, mode):
        window = np.ones(ACCUMULATED_PREFERENCE_THRESHOLD + 1, dtype=np.uint8)
        assert select_samples(mode, self.frame, window) is window

    @pytest.mark.parametrize("mode", ["distribution", "scatter"])
    def test_uses_frame_at_threshold(self, mode):
        window = np.ones(ACCUMULATED_PREFERENCE_THRESHOLD, dtype=np.uint8)
        assert select_samples(mode, self.frame, window) is self.frame

    @pytest.mark.parametrize("mode", ["bits", "color"])
    def test_frame_only_modes(self, mode):
        window = np.ones(50_000, dtype=np.uint8)
        assert select_samples(mode, self.frame, window) is self.frame

    def test_no_window(self):
        assert select_samples(RenderMode.SCATTER, self.frame, None) is self.frame

    def test_unknown_mode(self):
        with pytest.raises(InvalidArgument):
            select_samples("spiral", self.frame, None)


class TestHSL:
    @pytest.mark.parametrize("hue,rgb", [(0, (255, 0, 0)), (120, (0, 255, 0)), (240, (0, 0, 255)), (360, (255, 0, 0))])
    def test_primaries(self, hue, rgb):
        assert tuple(hsl_to_rgb(hue, 1.0, 0.5)) == rgb

    def test_white_and_black(self):
        assert tuple(hsl_to_rgb(77, 0.5, 1.0)) == (255, 255, 255)
        assert tuple(hsl_to_rgb(77, 0.5, 0.0)) == (0, 0, 0)

    def test_broadcast_shape(self):
        out = hsl_to_rgb(np.arange(10) * 36.0, 0.7, 0.5)
        assert out.shape == (10, 3)
        assert out.dtype == np.uint8


class TestCanvas:
    def test_clear(self):
        c = Canvas(10, 5)
        c.pixels[:] = 255
        c.clear()
        assert (c.pixels == BACKGROUND).all()

    def test_fill_rect_clips(self):
        c = Canvas(10, 10)
        c.fill_rect(-5, 8, 100, 100, (1, 2, 3))
        assert tuple(c.pixels[9, 9]) == (1, 2, 3)
        assert tuple(c.pixels[7, 0]) == BACKGROUND

    def test_save_png(self, tmp_path):
        c = Canvas(32, 16)
        path = tmp_path / "out.png"
        c.save_png(str(path))
        with Image.open(path) as img:
            assert img.size == (32, 16)


class TestViews:
    def test_render_redraws_from_scratch(self):
        c = Canvas(64, 64)
        c.pixels[:] = 255
        render("color", _frame(0), None, c)
        assert tuple(c.pixels[63, 63]) == BACKGROUND

    def test_bits_on_and_off_cells_differ(self):
        c = Canvas(128, 64)
        render("bits", _frame(0b10000000), None, c)
        on, off = tuple(c.pixels[0, 0]), tuple(c.pixels[0, BIT_CELL])
        assert on != off
        assert on == tuple(hsl_to_rgb(0, 0.7, 0.7))
        assert off == tuple(hsl_to_rgb(0, 0.7, 0.2))
        # gap column between cells and unused cells stay background
        assert tuple(c.pixels[0, BIT_CELL - 1]) == BACKGROUND
        assert tuple(c.pixels[0, 8 * BIT_CELL]) == BACKGROUND

    def test_distribution_bar(self):
        c = Canvas(256, 200)
        render("distribution", np.full(100, 5, dtype=np.uint8), None, c)
        assert tuple(c.pixels[100, 5]) != BACKGROUND
        assert tuple(c.pixels[100, 100]) == BACKGROUND

    def test_distribution_uses_window(self):
        c = Canvas(256, 200)
        window = np.full(2000, 200, dtype=np.uint8)
        render("distribution", np.full(100, 5, dtype=np.uint8), window, c)
        assert tuple(c.pixels[100, 200]) != BACKGROUND
        assert tuple(c.pixels[100, 5]) == BACKGROUND

    def test_scatter_point(self):
        c = Canvas(200, 200)
        render("scatter", _frame(255, 255), None, c)
        # (255, 255) lands in the top-right corner of the plot area
        assert tuple(c.pixels[40, 160]) == tuple(hsl_to_rgb(0, 0.8, 0.6))

    def test_color_grid(self):
        c = Canvas(100, 100)
        render("color", _frame(0, 64, 128, 255), None, c)
        assert tuple(c.pixels[10, 10]) == tuple(hsl_to_rgb(0, 0.6, 0.4))
        v = 255
        assert tuple(c.pixels[60, 60]) == tuple(hsl_to_rgb(360.0, (60 + v % 40) / 100, (40 + v % 30) / 100))

    @pytest.mark.parametrize("mode", ["bits", "distribution", "scatter", "color"])
    def test_empty_frame_does_not_fail(self, mode):
        c = Canvas(50, 50)
        render(mode, np.empty(0, dtype=np.uint8), None, c)
