from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from vdview_raster import (
    ImageLoadError,
    RasterStyle,
    draw_label,
    load_image,
    new_canvas,
    render_scene,
    save_png,
    text_size,
)
from vdview_raster.scene_renderer import label_origin
from vdview_script import Point, parse_script


GRAY = (128, 128, 128, 255)
BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)
RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


class DrawLabelTests(unittest.TestCase):
    def test_empty_text_is_noop(self) -> None:
        canvas = new_canvas(20, 20, color=GRAY)
        self.assertEqual(draw_label(canvas, 2, 2, "", BLACK), (0, 0))
        self.assertEqual(draw_label(canvas, 2, 2, None, BLACK), (0, 0))
        self.assertTrue(np.all(canvas == np.asarray(GRAY, dtype=np.uint8)))

    def test_background_box_is_drawn_under_text(self) -> None:
        canvas = new_canvas(120, 40, color=GRAY)
        w, h = draw_label(canvas, 4, 6, "label", BLACK, background_color=WHITE, font_size_px=14.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        self.assertEqual((w, h), text_size("label", font_size_px=14.0))

        box = canvas[6 : 6 + h, 4 : 4 + w, :3].astype(np.int32)
        # Black text over a white box only produces grey levels.
        self.assertTrue(np.all(box[:, :, 0] == box[:, :, 1]))
        self.assertTrue(np.any(box[:, :, 0] == 255))
        self.assertTrue(np.any(box[:, :, 0] < 128))
        # Outside the box the surface is untouched.
        self.assertEqual(tuple(int(v) for v in canvas[0, 0]), GRAY)
        self.assertEqual(tuple(int(v) for v in canvas[6 + h, 4]), GRAY)

    def test_label_without_background_keeps_surface(self) -> None:
        canvas = new_canvas(120, 40, color=GRAY)
        w, h = draw_label(canvas, 4, 6, "label", BLACK, background_color=None, font_size_px=14.0)
        box = canvas[6 : 6 + h, 4 : 4 + w, 0]
        self.assertTrue(np.any(box == 128))
        self.assertFalse(np.any(box == 255))


class RenderSceneTests(unittest.TestCase):
    def test_points_are_drawn_over_lines(self) -> None:
        result = parse_script("point(10,20,P)\npoint(70,20,Q)\nline(P,Q)\n")
        style = RasterStyle(line_color=RED, point_color=BLUE, text_color=BLACK, point_radius=3)
        canvas = new_canvas(100, 40, color=WHITE)
        render_scene(canvas, result.scene, style)

        self.assertEqual(tuple(int(v) for v in canvas[20, 10]), BLUE)
        self.assertEqual(tuple(int(v) for v in canvas[20, 70]), BLUE)
        self.assertEqual(tuple(int(v) for v in canvas[20, 40]), RED)

        # The label box of P covers the stroke, so no red survives inside it.
        x, y = label_origin(Point(10, 20, "P"), style)
        w, h = text_size("P", font_size_px=style.font_size_px)
        box = canvas[y : y + h, x : x + w, :3].astype(np.int32)
        self.assertFalse(np.any(box[:, :, 0] > box[:, :, 1]))

    def test_unresolved_lines_are_not_drawn(self) -> None:
        result = parse_script("point(5,5,A)\nline(A,B)\n")
        style = RasterStyle(point_radius=0, label_background=None)
        canvas = new_canvas(4, 4, color=WHITE)
        render_scene(canvas, result.scene, style)
        self.assertTrue(np.all(canvas == 255))

    def test_label_origin_sits_right_of_marker(self) -> None:
        style = RasterStyle(point_radius=4, label_gap=5)
        self.assertEqual(label_origin(Point(10, 10, "A"), style), (19, 6))

    def test_style_validation(self) -> None:
        with self.assertRaises(ValueError):
            RasterStyle(line_thickness=0)
        with self.assertRaises(ValueError):
            RasterStyle(point_radius=-1)


class ImageIOTests(unittest.TestCase):
    def test_load_and_save_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "in.png"
            Image.new("RGB", (7, 5), (10, 20, 30)).save(src)
            canvas = load_image(src)
            self.assertEqual(canvas.shape, (5, 7, 4))
            self.assertEqual(tuple(int(v) for v in canvas[0, 0]), (10, 20, 30, 255))

            out = Path(tmp) / "out.png"
            self.assertTrue(save_png(canvas, out))
            with Image.open(out) as saved:
                self.assertEqual(saved.size, (7, 5))
                self.assertEqual(saved.mode, "RGBA")

    def test_load_missing_image_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ImageLoadError):
                load_image(Path(tmp) / "nope.png")

    def test_save_failure_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "missing_dir" / "out.png"
            with self.assertLogs("vdview_raster.image_io", level="ERROR"):
                self.assertFalse(save_png(new_canvas(2, 2), out))


if __name__ == "__main__":
    unittest.main()
