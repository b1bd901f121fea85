from __future__ import annotations

from dataclasses import dataclass, replace
import math

import numpy as np
from PIL import Image, ImageDraw

from weather_banner.canvas import FontSlant, FontWeight, TextExtents
from weather_banner.raster.text import DEFAULT_FONT_FAMILY, load_font, measure, render_mask, rotate_mask


RGBA = tuple[int, int, int, int]
Matrix = tuple[float, float, float, float, float, float]
Point = tuple[float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
CURVE_SEGMENTS = 12


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


@dataclass(frozen=True)
class _State:
    matrix: Matrix = IDENTITY
    color: RGBA = (0, 0, 0, 255)
    line_width: float = 2.0
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = 10.0
    bold: bool = False


@dataclass
class _Subpath:
    points: list[Point]
    closed: bool = False


class RasterCanvas:
    """Canvas that rasterizes into an RGBA buffer with Pillow."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas width/height must be > 0")
        self.width = width
        self.height = height
        self._image = Image.fromarray(new_canvas(width, height, background))
        self._state = _State()
        self._stack: list[_State] = []
        self._path: list[_Subpath] = []
        self._current: Point | None = None

    @property
    def image(self) -> Image.Image:
        return self._image

    def to_rgba(self) -> np.ndarray:
        return np.array(self._image, dtype=np.uint8)

    # State

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore without matching save")
        self._state = self._stack.pop()

    def set_source_rgba(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        color = tuple(int(round(max(0.0, min(1.0, v)) * 255.0)) for v in (r, g, b, a))
        self._state = replace(self._state, color=color)

    def set_line_width(self, width: float) -> None:
        self._state = replace(self._state, line_width=width)

    def select_font_face(self, family: str, slant: FontSlant = "normal", weight: FontWeight = "normal") -> None:
        self._state = replace(self._state, font_family=family, bold=weight == "bold")

    def set_font_size(self, size: float) -> None:
        self._state = replace(self._state, font_size=size)

    def translate(self, tx: float, ty: float) -> None:
        a, b, c, d, e, f = self._state.matrix
        self._state = replace(self._state, matrix=(a, b, c, d, e + a * tx + c * ty, f + b * tx + d * ty))

    def rotate(self, angle: float) -> None:
        a, b, c, d, e, f = self._state.matrix
        cos, sin = math.cos(angle), math.sin(angle)
        self._state = replace(
            self._state,
            matrix=(a * cos + c * sin, b * cos + d * sin, c * cos - a * sin, d * cos - b * sin, e, f),
        )

    # Path construction

    def new_path(self) -> None:
        self._path = []
        self._current = None

    def move_to(self, x: float, y: float) -> None:
        p = self._to_device(x, y)
        self._path.append(_Subpath(points=[p]))
        self._current = p

    def line_to(self, x: float, y: float) -> None:
        self._line_to_device(self._to_device(x, y))

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        if self._current is None:
            self.move_to(x1, y1)
        p0 = self._current
        assert p0 is not None
        p1 = self._to_device(x1, y1)
        p2 = self._to_device(x2, y2)
        p3 = self._to_device(x3, y3)
        for k in range(1, CURVE_SEGMENTS + 1):
            t = k / CURVE_SEGMENTS
            u = 1.0 - t
            w0, w1, w2, w3 = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
            self._line_to_device(
                (
                    w0 * p0[0] + w1 * p1[0] + w2 * p2[0] + w3 * p3[0],
                    w0 * p0[1] + w1 * p1[1] + w2 * p2[1] + w3 * p3[1],
                )
            )

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        while angle2 < angle1:
            angle2 += 2.0 * math.pi
        self._arc(xc, yc, radius, angle1, angle2)

    def arc_negative(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        while angle2 > angle1:
            angle2 -= 2.0 * math.pi
        self._arc(xc, yc, radius, angle1, angle2)

    def rectangle(self, x: float, y: float, w: float, h: float) -> None:
        self.move_to(x, y)
        self.line_to(x + w, y)
        self.line_to(x + w, y + h)
        self.line_to(x, y + h)
        self.close_path()

    def close_path(self) -> None:
        if not self._path:
            return
        sub = self._path[-1]
        sub.closed = True
        start = sub.points[0]
        self._path.append(_Subpath(points=[start]))
        self._current = start

    # Painting

    def fill(self) -> None:
        self.fill_preserve()
        self.new_path()

    def fill_preserve(self) -> None:
        mask = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(mask)
        for sub in self._path:
            if len(sub.points) >= 3:
                draw.polygon(sub.points, fill=255)
        self._composite(np.asarray(mask, dtype=np.uint8), 0, 0)

    def stroke(self) -> None:
        mask = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(mask)
        width = max(1, int(round(self._state.line_width * self._scale())))
        for sub in self._path:
            if len(sub.points) < 2:
                continue
            pts = sub.points + [sub.points[0]] if sub.closed else sub.points
            draw.line(pts, fill=255, width=width, joint="curve")
        self._composite(np.asarray(mask, dtype=np.uint8), 0, 0)
        self.new_path()

    # Text

    def text_extents(self, text: str) -> TextExtents:
        font = load_font(self._state.font_family, self._state.font_size, self._state.bold)
        return measure(text, font)

    def show_text(self, text: str) -> None:
        if not text:
            return
        if self._current is None:
            self.move_to(0.0, 0.0)
        x, y = self._current
        scale = self._scale()
        font = load_font(self._state.font_family, self._state.font_size * scale, self._state.bold)
        a, b = self._state.matrix[0], self._state.matrix[1]
        angle = math.atan2(b, a)
        mask, half = render_mask(text, font)
        mask = rotate_mask(mask, half, angle)
        self._composite(mask, int(round(x)) - half, int(round(y)) - half)
        advance = float(font.getlength(text)) if hasattr(font, "getlength") else float(mask.shape[1])
        self._current = (x + advance * math.cos(angle), y + advance * math.sin(angle))

    # Internals

    def _to_device(self, x: float, y: float) -> Point:
        a, b, c, d, e, f = self._state.matrix
        return (a * x + c * y + e, b * x + d * y + f)

    def _scale(self) -> float:
        a, b, c, d, _, _ = self._state.matrix
        return math.sqrt(abs(a * d - b * c))

    def _line_to_device(self, p: Point) -> None:
        if not self._path:
            self._path.append(_Subpath(points=[p]))
        else:
            self._path[-1].points.append(p)
        self._current = p

    def _arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        span = angle2 - angle1
        segments = max(4, min(720, int(math.ceil(abs(span) * max(radius * self._scale(), 1.0) / 4.0))))
        for k in range(segments + 1):
            t = angle1 + span * k / segments
            p = self._to_device(xc + radius * math.cos(t), yc + radius * math.sin(t))
            if k == 0 and self._current is None:
                self._path.append(_Subpath(points=[p]))
                self._current = p
            else:
                self._line_to_device(p)

    def _composite(self, mask: np.ndarray, x: int, y: int) -> None:
        h, w = mask.shape
        x0, y0 = max(0, x), max(0, y)
        x1, y1 = min(self.width, x + w), min(self.height, y + h)
        if x1 <= x0 or y1 <= y0:
            return
        cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.uint16)
        if not np.any(cov):
            return
        r, g, b, a = self._state.color
        patch = np.zeros((y1 - y0, x1 - x0, 4), dtype=np.uint8)
        patch[:, :, 0] = r
        patch[:, :, 1] = g
        patch[:, :, 2] = b
        patch[:, :, 3] = (cov * a // 255).astype(np.uint8)
        self._image.alpha_composite(Image.fromarray(patch), dest=(x0, y0))
