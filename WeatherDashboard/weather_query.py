"""Location queries accepted by the proxy endpoint: a city name or a coordinate pair."""
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union


MISSING_LOCATION_MESSAGE = "City or latitude/longitude query parameters are required"


class MissingLocationError(ValueError):
    """Raised when a request carries neither a city nor a usable coordinate pair."""

    def __init__(self, message: str = MISSING_LOCATION_MESSAGE):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class CityQuery:
    """Weather for a place looked up by name."""
    city: str


@dataclass(frozen=True)
class CoordinatesQuery:
    """Weather for a latitude/longitude pair."""
    lat: float
    lon: float


WeatherQuery = Union[CityQuery, CoordinatesQuery]


def _values(args: Mapping[str, Any], name: str) -> List[Any]:
    # werkzeug MultiDict keeps repeated parameters; plain dicts may hold lists
    if hasattr(args, "getlist"):
        return list(args.getlist(name))
    value = args.get(name)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _single_value(args: Mapping[str, Any], name: str) -> Optional[str]:
    """Return the parameter if it was given exactly once and is not blank."""
    values = _values(args, name)
    if len(values) != 1:
        return None
    value = str(values[0]).strip()
    return value or None


def _parse_coordinate(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_query(args: Mapping[str, Any]) -> WeatherQuery:
    """
    Build a WeatherQuery from request arguments.

    Coordinates win over a city when both are supplied. A coordinate pair is
    only used when both ``lat`` and ``lon`` are single, numeric values.

    Args:
        args: Request query arguments (``city``, ``lat``, ``lon``)

    Returns:
        CoordinatesQuery or CityQuery

    Raises:
        MissingLocationError: If neither form of location is present
    """
    lat = _parse_coordinate(_single_value(args, "lat"))
    lon = _parse_coordinate(_single_value(args, "lon"))
    if lat is not None and lon is not None:
        return CoordinatesQuery(lat=lat, lon=lon)

    city = _single_value(args, "city")
    if city is not None:
        return CityQuery(city=city)

    raise MissingLocationError()


def describe_query(query: WeatherQuery) -> str:
    """Short human-readable form of a query, for log lines."""
    if isinstance(query, CoordinatesQuery):
        return f"lat={query.lat}, lon={query.lon}"
    if isinstance(query, CityQuery):
        return f"city={query.city!r}"
    raise TypeError(f"Unsupported query type: {type(query).__name__}")
