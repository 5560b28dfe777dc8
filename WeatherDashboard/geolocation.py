"""Browser geolocation outcomes and the messages shown for them.

The browser does the actual ``navigator.geolocation`` call; the page reloads
itself with the outcome in the query string (``geo_lat``/``geo_lon`` or
``geo_error``), which is turned into a single-shot LocationSource here.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional, Union


class GeolocationErrorCode(IntEnum):
    """Codes reported by the browser's GeolocationPositionError."""
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


GEOLOCATION_MESSAGES = {
    GeolocationErrorCode.PERMISSION_DENIED: "Please allow access to your location.",
    GeolocationErrorCode.POSITION_UNAVAILABLE: "No location information is available.",
    GeolocationErrorCode.TIMEOUT: "The location request timed out.",
}
UNSUPPORTED_MESSAGE = "This browser does not support geolocation."


def geolocation_error_message(code: int) -> str:
    """Map a geolocation error code to the message shown to the user."""
    try:
        return GEOLOCATION_MESSAGES[GeolocationErrorCode(code)]
    except ValueError:
        return f"An unknown location error occurred. (code: {code})"


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeolocationFailure:
    code: int

    @property
    def message(self) -> str:
        return geolocation_error_message(self.code)


LocationOutcome = Union[Position, GeolocationFailure]


class LocationSource(ABC):
    """Something that can be asked, once, where the user is."""

    @abstractmethod
    def locate(self) -> LocationOutcome:
        pass


class FixedLocationSource(LocationSource):
    """LocationSource that answers with an outcome known in advance."""

    def __init__(self, outcome: LocationOutcome):
        self.outcome = outcome

    def locate(self) -> LocationOutcome:
        return self.outcome


def _float_or_none(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class BrowserLocationReport:
    """
    What the browser told us about geolocation on this page load.

    ``status`` is one of "pending" (nothing reported yet), "position",
    "error" or "unsupported".
    """

    PENDING = "pending"
    POSITION = "position"
    ERROR = "error"
    UNSUPPORTED = "unsupported"

    def __init__(self, status: str, outcome: Optional[LocationOutcome] = None):
        self.status = status
        self.outcome = outcome

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "BrowserLocationReport":
        error = args.get("geo_error")
        if error is not None:
            if error == "unsupported":
                return cls(cls.UNSUPPORTED)
            try:
                code = int(error)
            except ValueError:
                code = 0
            return cls(cls.ERROR, GeolocationFailure(code))

        lat_raw = args.get("geo_lat")
        lon_raw = args.get("geo_lon")
        if lat_raw is None and lon_raw is None:
            return cls(cls.PENDING)

        lat = _float_or_none(lat_raw)
        lon = _float_or_none(lon_raw)
        if lat is None or lon is None:
            return cls(cls.ERROR, GeolocationFailure(GeolocationErrorCode.POSITION_UNAVAILABLE))
        return cls(cls.POSITION, Position(latitude=lat, longitude=lon))

    @property
    def is_pending(self) -> bool:
        return self.status == self.PENDING

    def as_source(self) -> Optional[LocationSource]:
        """LocationSource for this report, or None when geolocation is unsupported."""
        if self.status == self.UNSUPPORTED:
            return None
        if self.outcome is None:
            raise ValueError("No location outcome has been reported yet")
        return FixedLocationSource(self.outcome)

    def query_args(self) -> Dict[str, str]:
        """Query parameters that reproduce this report (kept across city searches)."""
        if self.status == self.UNSUPPORTED:
            return {"geo_error": "unsupported"}
        if isinstance(self.outcome, GeolocationFailure):
            return {"geo_error": str(int(self.outcome.code))}
        if isinstance(self.outcome, Position):
            return {"geo_lat": repr(self.outcome.latitude), "geo_lon": repr(self.outcome.longitude)}
        return {}
