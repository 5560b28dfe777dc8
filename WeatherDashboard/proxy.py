"""Proxy between the dashboard and the upstream weather provider.

The API key stays on the server; callers only ever see the normalized
payload or a ``{"message": ...}`` error body.
"""
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from config import Config
from openweather_provider import OpenWeatherProvider
from weather_provider import (
    WeatherProviderBase,
    ProviderError,
    ProviderFormatError,
    ProviderTransportError,
)
from weather_query import MissingLocationError, describe_query, parse_query


CONFIG_ERROR_MESSAGE = "API Key not configured"
NETWORK_ERROR_MESSAGE = "Internal Server Error or Network Issue"

ProxyResponse = Tuple[Dict[str, Any], int]
ProviderFactory = Callable[[Config], WeatherProviderBase]


def default_provider_factory(config: Config) -> WeatherProviderBase:
    return OpenWeatherProvider(
        api_key=config.api_key,
        units=config.units,
        lang=config.lang,
        timeout=config.timeout,
    )


def handle_weather_request(
    args: Mapping[str, Any],
    config: Config,
    provider_factory: Optional[ProviderFactory] = None,
) -> ProxyResponse:
    """
    Resolve one ``/api/weather`` request.

    Args:
        args: Query arguments (``city`` or ``lat`` + ``lon``)
        config: Server configuration holding the API key
        provider_factory: Builds the upstream provider (defaults to OpenWeather)

    Returns:
        Tuple of (JSON body, HTTP status)
    """
    if not config.has_api_key:
        logging.error("Weather request rejected: OPENWEATHER_API_KEY is not configured")
        return {"message": CONFIG_ERROR_MESSAGE}, 500

    try:
        query = parse_query(args)
    except MissingLocationError as e:
        logging.info("Weather request rejected: no location given")
        return {"message": e.message}, 400

    provider = (provider_factory or default_provider_factory)(config)
    logging.info(f"Proxying weather request: {describe_query(query)}")

    try:
        weather = provider.get_current(query)
    except ProviderError as e:
        logging.warning(f"Provider reported error {e.status_code}: {e.message}")
        return {"message": e.message}, e.status_code
    except ProviderFormatError as e:
        logging.error(f"Provider returned an unusable payload: {e}")
        return {"message": str(e)}, 502
    except ProviderTransportError as e:
        logging.error(f"Error fetching weather data: {e}")
        return {"message": NETWORK_ERROR_MESSAGE}, 500

    return weather.to_dict(), 200
