from __future__ import annotations

from typing import Iterable

import numpy as np

from weather_banner.canvas import Canvas
from weather_banner.chart import render_banner as _render_banner
from weather_banner.config import RenderConfig
from weather_banner.periods import Year
from weather_banner.raster import RasterCanvas
from weather_banner.records import DayRecord, Station


def _as_year(year: Year | int) -> Year:
    return year if isinstance(year, Year) else Year.from_ordinal(year)


def render_banner(
    ctx: Canvas,
    year: Year | int,
    records: Iterable[DayRecord],
    config: RenderConfig | None = None,
    *,
    title: str | None = None,
) -> None:
    _render_banner(ctx, _as_year(year), records, config or RenderConfig(), title=title)


def render_rgba(
    year: Year | int,
    records: Iterable[DayRecord],
    config: RenderConfig | None = None,
    *,
    title: str | None = None,
) -> np.ndarray:
    config = config or RenderConfig()
    canvas = RasterCanvas(config.width, config.height)
    render_banner(canvas, year, records, config, title=title)
    return canvas.to_rgba()


def render_station(station: Station, year: Year | int, config: RenderConfig | None = None) -> np.ndarray:
    y = _as_year(year)
    title = f"{station.name or station.id} {y}"
    return render_rgba(y, station.days_in(y.ordinal()), config, title=title)
