"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from typing import Any, Dict, Optional
from weather_provider import (
    WeatherProviderBase,
    ProviderError,
    ProviderFormatError,
    ProviderTransportError,
)
from weather_data import WeatherData
from weather_query import CityQuery, CoordinatesQuery, WeatherQuery, describe_query


SUCCESS_CODE = 200
# Used when the provider reports a failure without a usable HTTP error code
BAD_GATEWAY = 502


def build_params(query: WeatherQuery) -> Dict[str, Any]:
    """
    Location parameters for the upstream request.

    Coordinate queries are keyed by ``lat``/``lon`` and city queries by ``q``;
    the two never mix.
    """
    if isinstance(query, CoordinatesQuery):
        return {"lat": query.lat, "lon": query.lon}
    if isinstance(query, CityQuery):
        return {"q": query.city}
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


def _coerce_code(cod: Any) -> Optional[int]:
    try:
        return int(cod)
    except (TypeError, ValueError):
        return None


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    Accepts both "weather by coordinates" and "weather by city name" lookups.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "kr",
        timeout: float = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "kr", "en")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_current(self, query: WeatherQuery) -> WeatherData:
        """
        Fetch current weather from OpenWeather Current Weather API.

        Exactly one request is made; nothing is retried.

        Returns:
            WeatherData: Current weather information

        Raises:
            ProviderError: If the response body reports a non-success code
            ProviderTransportError: If the request fails or the body is not JSON
            ProviderFormatError: If a success body lacks required blocks
        """
        params = build_params(query)
        params.update({
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        })

        try:
            logging.info(f"Making OpenWeather API request: {self.BASE_URL}")
            logging.debug(f"Request parameters: {describe_query(query)}, units={self.units}, lang={self.lang}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise ProviderTransportError(f"Network error: {e}")

        logging.info(f"API response status: {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Non-JSON response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise ProviderTransportError(f"Failed to decode response: {e}")

        if not isinstance(data, dict):
            raise ProviderTransportError(f"Unexpected response body type: {type(data).__name__}")

        logging.debug(f"API response data keys: {list(data.keys())}")
        self._check_status(data, response.status_code)
        return self._parse_current(data)

    def _check_status(self, data: Dict[str, Any], http_status: int) -> None:
        """Raise ProviderError if the body (or, lacking one, HTTP) reports failure."""
        cod = data.get("cod")
        if cod in (None, ""):
            if http_status < 400:
                return
            code = None
        else:
            code = _coerce_code(cod)
            if code == SUCCESS_CODE:
                return

        if code is not None and 400 <= code <= 599:
            status = code
        elif http_status >= 400:
            status = http_status
        else:
            status = BAD_GATEWAY

        message = data.get("message") or f"OpenWeatherMap API Error: {cod if cod not in (None, '') else http_status}"
        logging.error(f"OpenWeather API error response: cod={cod} message={data.get('message')!r}")
        raise ProviderError(status, str(message))

    def _parse_current(self, data: Dict[str, Any]) -> WeatherData:
        """Map a Current Weather API payload to WeatherData."""
        # Extract weather array (usually has one element)
        weather_array = data.get("weather") or []
        if not weather_array:
            logging.error("Response missing 'weather' array")
            raise ProviderFormatError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main") or {}
        if not main_data:
            logging.error("Response missing 'main' block")
            raise ProviderFormatError("Response missing 'main' block")

        wind_data = data.get("wind") or {}

        try:
            weather_data = WeatherData(
                location_name=data.get("name", ""),
                condition_description=weather.get("description", ""),
                condition_icon=weather.get("icon", ""),
                temperature_c=float(main_data["temp"]),
                feels_like_c=float(main_data.get("feels_like", main_data["temp"])),
                humidity_percent=float(main_data.get("humidity", 0.0)),
                wind_speed_ms=float(wind_data.get("speed", 0.0)),
            )
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise ProviderFormatError(f"Failed to parse response: {e}")

        logging.info(f"Successfully parsed weather data: {weather_data.location_name} {weather_data.temperature_c}°C")
        return weather_data
