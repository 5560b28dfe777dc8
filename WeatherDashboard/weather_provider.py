"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from weather_data import WeatherData
from weather_query import WeatherQuery


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, query: WeatherQuery) -> WeatherData:
        """
        Fetch current weather data for a city or coordinate pair.

        Returns:
            WeatherData: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class ProviderError(WeatherProviderError):
    """The provider answered, but reported a non-success status in its body."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Provider error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ProviderTransportError(WeatherProviderError):
    """The request never produced a structured provider response."""
    pass


class ProviderFormatError(WeatherProviderError):
    """A success response was missing fields the dashboard needs."""
    pass
