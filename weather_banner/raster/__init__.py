from .canvas import RasterCanvas, new_canvas
from .text import DEFAULT_FONT_FAMILY, load_font, measure

__all__ = [
    "DEFAULT_FONT_FAMILY",
    "RasterCanvas",
    "load_font",
    "measure",
    "new_canvas",
]
