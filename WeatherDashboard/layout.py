"""Layout logic for the dashboard page - pure functions for testability."""
import math
from typing import Any, Dict, List, Optional, Tuple

from dashboard import DashboardState
from weather_data import WeatherData


MIN_TEMP_C = -20.0
MAX_TEMP_C = 40.0

# Ring colors, pre-blended over a white background
VALUE_FILL = (134, 199, 243)
VALUE_BORDER = (54, 162, 235)
REST_FILL = (222, 222, 222)
REST_BORDER = (200, 200, 200)
BACKGROUND = (255, 255, 255)

# Inner hole as a fraction of the outer radius
CUTOUT = 0.6
# Rings start at 12 o'clock and run clockwise (PIL angles: 0 = 3 o'clock)
START_ANGLE = -90.0


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    def __repr__(self) -> str:
        return f"DrawOp({self.op_type!r}, {self.kwargs!r})"


def temperature_percentage(temp_c: Optional[float]) -> Optional[int]:
    """
    Position of a temperature on the -20°C..40°C scale, as a percentage.

    Temperatures outside the scale are clamped to its ends.

    Args:
        temp_c: Temperature in Celsius, or None when there is no reading

    Returns:
        Integer in [0, 100], or None for no reading
    """
    if temp_c is None:
        return None
    clamped = max(MIN_TEMP_C, min(MAX_TEMP_C, temp_c))
    percentage = (clamped - MIN_TEMP_C) / (MAX_TEMP_C - MIN_TEMP_C) * 100
    # half-up, so 0.5% reads as 1%
    return int(math.floor(percentage + 0.5))


def clamp_percentage(percentage: int) -> int:
    return max(0, min(100, percentage))


def calculate_ring(percentage: int, size: int = 200) -> List[DrawOp]:
    """
    Calculate the drawing operations for a two-segment ring chart.

    The first segment covers ``percentage`` of the ring, the second the rest;
    a segment of zero width is left out.

    Args:
        percentage: Value segment share, 0-100
        size: Width and height of the square image in pixels

    Returns:
        List of DrawOp objects: "arc" segments followed by one "cutout"
    """
    percentage = clamp_percentage(percentage)
    ops = []
    box = (0, 0, size - 1, size - 1)
    sweep = 360.0 * percentage / 100
    value_end = START_ANGLE + sweep

    if percentage > 0:
        ops.append(DrawOp("arc", box=box, start=START_ANGLE, end=value_end,
                          fill=VALUE_FILL, outline=VALUE_BORDER))
    if percentage < 100:
        ops.append(DrawOp("arc", box=box, start=value_end, end=START_ANGLE + 360.0,
                          fill=REST_FILL, outline=REST_BORDER))

    radius = (size - 1) / 2
    inner = radius * CUTOUT
    center = radius
    ops.append(DrawOp("cutout",
                      box=(center - inner, center - inner, center + inner, center + inner),
                      fill=BACKGROUND))
    return ops


def _number(value: float) -> str:
    return f"{value:g}"


def format_weather_lines(weather: WeatherData) -> List[Tuple[str, str]]:
    """Label/value pairs for the result panel, in display order."""
    return [
        ("Current weather", weather.condition_description),
        ("Temperature", f"{_number(weather.temperature_c)}°C"),
        ("Feels like", f"{_number(weather.feels_like_c)}°C"),
        ("Humidity", f"{_number(weather.humidity_percent)}%"),
        ("Wind speed", f"{_number(weather.wind_speed_ms)} m/s"),
    ]


def chart_title(weather: Optional[WeatherData]) -> str:
    if weather is None:
        return "Temperature scale"
    return (f"Current temperature ({_number(weather.temperature_c)}°C) "
            f"on a {MIN_TEMP_C:g}°C to {MAX_TEMP_C:g}°C scale")


CHART_LEGEND = "Current temperature"


def chart_tooltip(percentage: int) -> str:
    return f"{CHART_LEGEND}: {percentage}%"


def css_rgb(color: Tuple[int, int, int]) -> str:
    return "rgb({}, {}, {})".format(*color)


def build_view(state: DashboardState) -> Dict[str, Any]:
    """
    Flatten dashboard state into template variables.

    Args:
        state: Current dashboard state

    Returns:
        Dict with the status lines, result panel and chart settings
    """
    weather = state.weather
    percentage = temperature_percentage(weather.temperature_c if weather else None)
    view = {
        "location_status": "Checking your location..." if state.location_loading else "",
        "location_error": state.location_error,
        "loading": state.loading,
        "error": state.error,
        "weather": weather,
        "lines": format_weather_lines(weather) if weather else [],
        "chart": None,
    }
    if percentage is not None:
        view["chart"] = {
            "percentage": percentage,
            "title": chart_title(weather),
            "tooltip": chart_tooltip(percentage),
            "legend": CHART_LEGEND,
            "legend_color": css_rgb(VALUE_FILL),
        }
    return view
