"""Dashboard state and the choreography that fills it.

One Dashboard backs one page render: it resolves the user's location once,
runs fetch cycles against the proxy, and exposes the resulting state for
the template.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from geolocation import (
    LocationSource,
    Position,
    UNSUPPORTED_MESSAGE,
)
from proxy_client import WeatherClient
from weather_data import WeatherData
from weather_query import CityQuery, CoordinatesQuery, WeatherQuery


COORDINATES_FAILURE_MESSAGE = "Failed to fetch weather for your location."
CITY_FAILURE_MESSAGE = "Failed to fetch weather for that city."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while fetching weather."


@dataclass
class DashboardState:
    """Everything the page needs to render."""
    weather: Optional[WeatherData] = None
    loading: bool = False
    error: Optional[str] = None
    location_loading: bool = True
    location_error: Optional[str] = None


class Dashboard:
    """
    Drives location resolution and weather fetches for the dashboard page.

    Every fetch cycle gets a sequence number. A cycle that finishes after a
    newer one has started leaves the state alone, so a slow response can
    never overwrite a more recent query's result.
    """

    def __init__(self, client: WeatherClient):
        self.client = client
        self.state = DashboardState()
        self._sequence = 0
        self._location_resolved = False

    @property
    def current_cycle(self) -> int:
        return self._sequence

    def resolve_location(self, source: Optional[LocationSource], fetch_on_success: bool = True) -> None:
        """
        Run the one-time location resolution.

        Args:
            source: Where to ask for the position; None means the browser
                has no geolocation support
            fetch_on_success: Fetch weather for the resolved coordinates
        """
        if self._location_resolved:
            logging.debug("Location already resolved for this page load")
            return
        self._location_resolved = True

        if source is None:
            logging.info("Geolocation not supported, manual entry only")
            self.state.location_error = UNSUPPORTED_MESSAGE
            self.state.location_loading = False
            return

        try:
            outcome = source.locate()
            if isinstance(outcome, Position):
                logging.info(f"Location resolved: {outcome.latitude}, {outcome.longitude}")
                if fetch_on_success:
                    self.fetch_by_coordinates(outcome.latitude, outcome.longitude)
            else:
                logging.warning(f"Geolocation error code {outcome.code}")
                self.state.location_error = outcome.message
        finally:
            self.state.location_loading = False

    def skip_location_resolution(self) -> None:
        """Mark resolution as finished without a result (e.g. a city was searched first)."""
        self._location_resolved = True
        self.state.location_loading = False

    def fetch_by_coordinates(self, lat: float, lon: float) -> None:
        self.fetch(CoordinatesQuery(lat=lat, lon=lon), COORDINATES_FAILURE_MESSAGE)

    def fetch_by_city(self, city: str) -> None:
        city = city.strip()
        if not city:
            logging.debug("Ignoring blank city search")
            return
        self.fetch(CityQuery(city=city), CITY_FAILURE_MESSAGE)

    def fetch(self, query: WeatherQuery, failure_message: str = UNEXPECTED_ERROR_MESSAGE) -> None:
        """
        Run one fetch cycle. Never raises: failures end up in ``state.error``.
        """
        cycle = self._open_cycle()
        try:
            response = self.client.fetch(query)
            if response.ok:
                self._complete(cycle, weather=WeatherData.from_dict(response.payload))
            else:
                message = response.payload.get("message") or failure_message
                logging.warning(f"Proxy returned {response.status_code}: {message}")
                self._complete(cycle, error=message)
        except Exception as exc:
            logging.exception(f"Fetch error: {exc}")
            self._complete(cycle, error=UNEXPECTED_ERROR_MESSAGE)
        finally:
            if cycle == self._sequence:
                self.state.loading = False

    def _open_cycle(self) -> int:
        self._sequence += 1
        self.state.loading = True
        self.state.error = None
        self.state.weather = None
        return self._sequence

    def _complete(self, cycle: int, weather: Optional[WeatherData] = None, error: Optional[str] = None) -> None:
        if cycle != self._sequence:
            logging.info(f"Discarding result of superseded fetch cycle {cycle} (current: {self._sequence})")
            return
        self.state.weather = weather
        self.state.error = error
