from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol


FontSlant = Literal["normal", "italic"]
FontWeight = Literal["normal", "bold"]


@dataclass(frozen=True)
class TextExtents:
    x_bearing: float
    y_bearing: float
    width: float
    height: float
    x_advance: float
    y_advance: float = 0.0


class Canvas(Protocol):
    """Cairo-style drawing surface the chart composer writes to."""

    def set_source_rgba(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def rectangle(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def new_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        ...

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        ...

    def arc_negative(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_preserve(self) -> None:
        ...

    def stroke(self) -> None:
        ...

    def select_font_face(self, family: str, slant: FontSlant = "normal", weight: FontWeight = "normal") -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def text_extents(self, text: str) -> TextExtents:
        ...

    def show_text(self, text: str) -> None:
        ...

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def translate(self, tx: float, ty: float) -> None:
        ...

    def rotate(self, angle: float) -> None:
        ...


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 0xFF

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        return cls(r, g, b)

    @classmethod
    def from_u32(cls, c: int) -> "Color":
        return cls((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF)

    @classmethod
    def from_u32_with_alpha(cls, c: int, alpha: float) -> "Color":
        return cls((c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF, int(alpha * 255.0))

    def with_alpha(self, alpha: float) -> "Color":
        return Color(self.r, self.g, self.b, int(alpha * 255.0))

    def set(self, ctx: Canvas) -> None:
        ctx.set_source_rgba(self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)


@dataclass(frozen=True)
class Font:
    family: str
    size: float
    slant: FontSlant = "normal"
    weight: FontWeight = "normal"

    def set(self, ctx: Canvas) -> None:
        ctx.select_font_face(self.family, self.slant, self.weight)
        ctx.set_font_size(self.size)


@dataclass(frozen=True)
class DrawCall:
    name: str
    args: tuple[Any, ...] = ()


@dataclass
class RecordingCanvas:
    """Canvas that keeps the ordered list of calls made against it.

    Text extents are estimated from the font size so layout code runs without
    a font backend.
    """

    calls: list[DrawCall] = field(default_factory=list)
    font_size: float = 10.0
    char_width_ratio: float = 0.6

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append(DrawCall(name, tuple(args)))

    def names(self) -> list[str]:
        return [c.name for c in self.calls]

    def calls_named(self, name: str) -> list[DrawCall]:
        return [c for c in self.calls if c.name == name]

    def set_source_rgba(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self._record("set_source_rgba", r, g, b, a)

    def set_line_width(self, width: float) -> None:
        self._record("set_line_width", width)

    def rectangle(self, x: float, y: float, w: float, h: float) -> None:
        self._record("rectangle", x, y, w, h)

    def new_path(self) -> None:
        self._record("new_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def curve_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self._record("curve_to", x1, y1, x2, y2, x3, y3)

    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        self._record("arc", xc, yc, radius, angle1, angle2)

    def arc_negative(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None:
        self._record("arc_negative", xc, yc, radius, angle1, angle2)

    def close_path(self) -> None:
        self._record("close_path")

    def fill(self) -> None:
        self._record("fill")

    def fill_preserve(self) -> None:
        self._record("fill_preserve")

    def stroke(self) -> None:
        self._record("stroke")

    def select_font_face(self, family: str, slant: FontSlant = "normal", weight: FontWeight = "normal") -> None:
        self._record("select_font_face", family, slant, weight)

    def set_font_size(self, size: float) -> None:
        self.font_size = size
        self._record("set_font_size", size)

    def text_extents(self, text: str) -> TextExtents:
        width = len(text) * self.font_size * self.char_width_ratio
        height = self.font_size * 0.7
        return TextExtents(x_bearing=0.0, y_bearing=-height, width=width, height=height, x_advance=width)

    def show_text(self, text: str) -> None:
        self._record("show_text", text)

    def save(self) -> None:
        self._record("save")

    def restore(self) -> None:
        self._record("restore")

    def translate(self, tx: float, ty: float) -> None:
        self._record("translate", tx, ty)

    def rotate(self, angle: float) -> None:
        self._record("rotate", angle)
