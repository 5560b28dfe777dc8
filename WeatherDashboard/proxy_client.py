"""Clients the dashboard uses to call the proxy endpoint."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from config import Config
from proxy import ProviderFactory, handle_weather_request
from weather_query import CityQuery, CoordinatesQuery, WeatherQuery


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    payload: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def query_to_args(query: WeatherQuery) -> Dict[str, str]:
    """Query parameters for ``/api/weather``."""
    if isinstance(query, CoordinatesQuery):
        return {"lat": str(query.lat), "lon": str(query.lon)}
    if isinstance(query, CityQuery):
        return {"city": query.city}
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


class WeatherClient(ABC):
    """Abstract client for the proxy endpoint."""

    @abstractmethod
    def fetch(self, query: WeatherQuery) -> ProxyResponse:
        """
        Ask the proxy for current weather.

        Returns:
            ProxyResponse: Status and JSON body as the proxy produced them

        Raises:
            Exception: Any transport failure is left to the caller
        """
        pass


class LocalProxyClient(WeatherClient):
    """Calls the proxy handler in-process (dashboard and proxy in one server)."""

    def __init__(self, config: Config, provider_factory: Optional[ProviderFactory] = None):
        self.config = config
        self.provider_factory = provider_factory

    def fetch(self, query: WeatherQuery) -> ProxyResponse:
        payload, status = handle_weather_request(query_to_args(query), self.config, self.provider_factory)
        return ProxyResponse(status_code=status, payload=payload)


class HttpProxyClient(WeatherClient):
    """Calls a proxy endpoint over HTTP."""

    def __init__(self, base_url: str, timeout: float = 10):
        """
        Args:
            base_url: Server root, e.g. "http://localhost:5000"
            timeout: HTTP request timeout in seconds
        """
        self.url = base_url.rstrip("/") + "/api/weather"
        self.timeout = timeout

    def fetch(self, query: WeatherQuery) -> ProxyResponse:
        logging.debug(f"Requesting {self.url} with {query_to_args(query)}")
        response = requests.get(self.url, params=query_to_args(query), timeout=self.timeout)
        try:
            payload = response.json()
        except ValueError:
            logging.warning(f"Proxy returned non-JSON body (HTTP {response.status_code})")
            payload = {}
        if not isinstance(payload, dict):
            payload = {}
        return ProxyResponse(status_code=response.status_code, payload=payload)
