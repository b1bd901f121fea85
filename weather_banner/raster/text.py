from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from weather_banner.canvas import TextExtents


DEFAULT_FONT_FAMILY = "DejaVu Sans"
FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
    "menlo",
    "courier",
)

AnyFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


def measure(text: str, font: AnyFont) -> TextExtents:
    ascent = _ascent(font)
    left, top, right, bottom = font.getbbox(text) if text else (0, 0, 0, 0)
    advance = float(font.getlength(text)) if hasattr(font, "getlength") else float(right)
    return TextExtents(
        x_bearing=float(left),
        y_bearing=float(top - ascent),
        width=float(right - left),
        height=float(bottom - top),
        x_advance=advance,
    )


@lru_cache(maxsize=256)
def render_mask(text: str, font: AnyFont) -> tuple[np.ndarray, int]:
    """Coverage mask for ``text`` centered on its baseline origin.

    Returns the square mask and its half size; the glyph origin sits at
    ``(half, half)`` so the mask can be rotated about it in place.
    """
    left, top, right, bottom = font.getbbox(text)
    ascent = _ascent(font)
    reach = max(abs(left), abs(right), abs(top - ascent), abs(bottom - ascent), 1)
    half = int(reach) + 2
    image = Image.new("L", (2 * half, 2 * half), 0)
    draw = ImageDraw.Draw(image)
    draw.text((half, half - ascent), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8), half


def rotate_mask(mask: np.ndarray, half: int, angle_rad: float) -> np.ndarray:
    if angle_rad == 0.0:
        return mask
    image = Image.fromarray(mask)
    # PIL rotates counter-clockwise; the canvas frame is y-down.
    rotated = image.rotate(-np.degrees(angle_rad), resample=Image.Resampling.BILINEAR, center=(half, half))
    return np.asarray(rotated, dtype=np.uint8)


@lru_cache(maxsize=64)
def load_font(family: str, size_px: float, bold: bool = False) -> AnyFont:
    size = max(1, int(round(size_px)))
    font_path = _resolve_font_path(family, bold)
    if font_path is None:
        return ImageFont.load_default()
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default()


def _ascent(font: AnyFont) -> int:
    if hasattr(font, "getmetrics"):
        return int(font.getmetrics()[0])
    _, _, _, bottom = font.getbbox("Ag")
    return int(bottom)


@lru_cache(maxsize=32)
def _resolve_font_path(family: str, bold: bool) -> Path | None:
    wanted = family.strip().lower() if family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        matches = [path for path in candidates if p in path.stem.lower().replace(" ", "")]
        if not matches:
            continue
        for path in matches:
            is_bold = "bold" in path.stem.lower()
            if is_bold == bold and "oblique" not in path.stem.lower() and "italic" not in path.stem.lower():
                return path
        return matches[0]
    return None
