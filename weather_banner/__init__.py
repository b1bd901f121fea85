from weather_banner.api import render_banner, render_rgba, render_station
from weather_banner.canvas import Canvas, Color, Font, RecordingCanvas, TextExtents
from weather_banner.config import RenderConfig, load_render_config
from weather_banner.errors import ChartDataError, ScaleError
from weather_banner.periods import Day, Month, Year
from weather_banner.ranges import Range, Unit
from weather_banner.records import DayRecord, Location, Station
from weather_banner.scales import Scale
from weather_banner.series import Series

__all__ = [
    "Canvas",
    "ChartDataError",
    "Color",
    "Day",
    "DayRecord",
    "Font",
    "Location",
    "Month",
    "Range",
    "RecordingCanvas",
    "RenderConfig",
    "Scale",
    "ScaleError",
    "Series",
    "Station",
    "TextExtents",
    "Unit",
    "Year",
    "load_render_config",
    "render_banner",
    "render_rgba",
    "render_station",
]
