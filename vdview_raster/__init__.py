from .canvas import RGBA, blit, draw_hline, draw_pixel, fill_rect, new_canvas
from .draw_shapes import draw_filled_circle, draw_line, draw_thick_line
from .draw_text import draw_label, text_size
from .image_io import ImageLoadError, load_image, save_png
from .scene_renderer import RasterStyle, draw_point, render_scene

__all__ = [
    "ImageLoadError",
    "RGBA",
    "RasterStyle",
    "blit",
    "draw_filled_circle",
    "draw_hline",
    "draw_label",
    "draw_line",
    "draw_pixel",
    "draw_point",
    "draw_thick_line",
    "fill_rect",
    "load_image",
    "new_canvas",
    "render_scene",
    "save_png",
    "text_size",
]
