"""
Tests for the crop rectangle computation.
"""

import pytest

from conftest import make_config
from focuscrop.core.geometry import compute_crop, round_half_up
from focuscrop.models.crop import CropRect, Focus, ImageDimensions


class TestWorkedExamples:

    def test_wide_image_left_focus(self):
        cfg = make_config(zoom=1.0, cut_percent=0.30, focus=Focus.LEFT)
        rect = compute_crop(ImageDimensions(4000, 2000), cfg)
        assert rect == CropRect(x=400, y=0, width=2000, height=2000)

    def test_wide_image_right_focus(self):
        cfg = make_config(zoom=1.0, cut_percent=0.30, focus=Focus.RIGHT)
        rect = compute_crop(ImageDimensions(4000, 2000), cfg)
        assert rect == CropRect(x=1600, y=0, width=2000, height=2000)

    def test_default_zoom_rounds_half_up(self):
        # (4000 - 1667) / 2 = 1166.5 and (2000 - 1667) / 2 = 166.5
        cfg = make_config(zoom=1.2, cut_percent=0.30, focus=Focus.LEFT)
        rect = compute_crop(ImageDimensions(4000, 2000), cfg)
        assert rect == CropRect(x=467, y=167, width=1667, height=1667)

        rect = compute_crop(ImageDimensions(4000, 2000), make_config(zoom=1.2, focus=Focus.RIGHT))
        assert rect == CropRect(x=1867, y=167, width=1667, height=1667)

    def test_tall_image_limited_by_width(self):
        cfg = make_config(zoom=1.0, cut_percent=0.30)
        rect = compute_crop(ImageDimensions(1000, 3000), cfg)
        assert rect == CropRect(x=0, y=1000, width=1000, height=1000)

    def test_non_square_output(self):
        cfg = make_config(width=1600, height=800, zoom=1.0, cut_percent=0.0)
        rect = compute_crop(ImageDimensions(1000, 1000), cfg)
        assert rect == CropRect(x=0, y=250, width=1000, height=500)


class TestFocusBias:

    @pytest.mark.parametrize("dims", [(4000, 2000), (1920, 1080), (801, 600), (3000, 3001)])
    def test_left_and_right_straddle_center(self, dims):
        orig = ImageDimensions(*dims)
        center = compute_crop(orig, make_config(cut_percent=0.0))
        left = compute_crop(orig, make_config(cut_percent=0.45, focus=Focus.LEFT))
        right = compute_crop(orig, make_config(cut_percent=0.45, focus=Focus.RIGHT))
        assert left.x <= center.x <= right.x
        assert left.y == center.y == right.y

    def test_no_shift_when_crop_fills_width(self):
        orig = ImageDimensions(500, 2000)
        left = compute_crop(orig, make_config(zoom=1.0, cut_percent=0.6, focus=Focus.LEFT))
        right = compute_crop(orig, make_config(zoom=1.0, cut_percent=0.6, focus=Focus.RIGHT))
        assert left.x == right.x == 0

    def test_vertical_position_always_centered(self):
        orig = ImageDimensions(1000, 4000)
        rect = compute_crop(orig, make_config(zoom=1.0, focus=Focus.RIGHT))
        assert rect.y == (4000 - rect.height) // 2


class TestZoom:

    def test_higher_zoom_shrinks_window(self):
        orig = ImageDimensions(4000, 2000)
        sizes = [compute_crop(orig, make_config(zoom=z)) for z in (1.0, 1.2, 1.5, 2.0)]
        widths = [r.width for r in sizes]
        heights = [r.height for r in sizes]
        assert widths == sorted(widths, reverse=True)
        assert len(set(widths)) == len(widths)
        assert len(set(heights)) == len(heights)

    def test_window_never_collapses(self):
        rect = compute_crop(ImageDimensions(1, 1), make_config(width=2000, height=50, zoom=2.0))
        assert rect.width >= 1 and rect.height >= 1


class TestBounds:

    @pytest.mark.parametrize("W,H", [
        (1, 1), (1, 5000), (5000, 1), (2, 3), (333, 777), (1920, 1080), (4000, 2000), (7, 7000),
    ])
    @pytest.mark.parametrize("width,height", [(50, 2000), (2000, 50), (700, 700), (1600, 900)])
    @pytest.mark.parametrize("focus", [Focus.LEFT, Focus.RIGHT])
    def test_rect_inside_original(self, W, H, width, height, focus):
        for zoom in (1.0, 1.37, 2.0):
            for cut in (0.0, 0.3, 0.6):
                cfg = make_config(width=width, height=height, zoom=zoom, cut_percent=cut, focus=focus)
                rect = compute_crop(ImageDimensions(W, H), cfg)
                assert rect.x >= 0 and rect.y >= 0
                assert rect.width >= 1 and rect.height >= 1
                assert rect.x + rect.width <= W
                assert rect.y + rect.height <= H

    def test_same_input_same_rect(self):
        cfg = make_config()
        orig = ImageDimensions(3024, 4032)
        assert compute_crop(orig, cfg) == compute_crop(orig, cfg)


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(1166.5) == 1167
    assert round_half_up(2.4999) == 2
    assert round_half_up(-0.5) == 0
