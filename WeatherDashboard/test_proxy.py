"""Tests for the proxy request handler."""
import pytest
from config import Config
from proxy import (
    CONFIG_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    default_provider_factory,
    handle_weather_request,
)
from openweather_provider import OpenWeatherProvider
from weather_data import WeatherData
from weather_provider import (
    WeatherProviderBase,
    ProviderError,
    ProviderFormatError,
    ProviderTransportError,
)
from weather_query import CityQuery, CoordinatesQuery


SEOUL = WeatherData(
    location_name="Seoul",
    condition_description="clear sky",
    condition_icon="01d",
    temperature_c=21.5,
    feels_like_c=20.9,
    humidity_percent=40.0,
    wind_speed_ms=3.6,
)


class MockProvider(WeatherProviderBase):
    """Mock weather provider that records the queries it receives."""

    def __init__(self, return_data=None, raise_error=None):
        self.return_data = return_data
        self.raise_error = raise_error
        self.queries = []

    def get_current(self, query):
        self.queries.append(query)
        if self.raise_error:
            raise self.raise_error
        return self.return_data


@pytest.fixture
def config():
    return Config(api_key="secret-key")


def factory_for(provider):
    return lambda _config: provider


def test_success_returns_normalized_payload(config):
    provider = MockProvider(return_data=SEOUL)

    body, status = handle_weather_request({"city": "Seoul"}, config, factory_for(provider))

    assert status == 200
    assert body == SEOUL.to_dict()
    assert provider.queries == [CityQuery("Seoul")]


def test_coordinates_build_coordinate_query(config):
    provider = MockProvider(return_data=SEOUL)

    handle_weather_request({"lat": "37.56", "lon": "126.97", "city": "Busan"}, config, factory_for(provider))

    assert provider.queries == [CoordinatesQuery(lat=37.56, lon=126.97)]


def test_missing_parameters_returns_400_without_upstream_call(config):
    provider = MockProvider(return_data=SEOUL)

    body, status = handle_weather_request({}, config, factory_for(provider))

    assert status == 400
    assert body == {"message": "City or latitude/longitude query parameters are required"}
    assert provider.queries == []


def test_missing_api_key_is_a_configuration_error():
    provider = MockProvider(return_data=SEOUL)

    body, status = handle_weather_request({"city": "Seoul"}, Config(api_key=None), factory_for(provider))

    assert status == 500
    assert body == {"message": CONFIG_ERROR_MESSAGE}
    assert provider.queries == []


def test_missing_api_key_checked_before_parameters():
    body, status = handle_weather_request({}, Config(api_key=""))
    assert status == 500
    assert body["message"] == CONFIG_ERROR_MESSAGE


@pytest.mark.parametrize("code", [400, 401, 404, 429, 500])
def test_provider_status_is_mirrored(config, code):
    provider = MockProvider(raise_error=ProviderError(code, "upstream said no"))

    body, status = handle_weather_request({"city": "Seoul"}, config, factory_for(provider))

    assert status == code
    assert body == {"message": "upstream said no"}


def test_transport_error_is_generic_500(config):
    provider = MockProvider(raise_error=ProviderTransportError("Network error: refused"))

    body, status = handle_weather_request({"city": "Seoul"}, config, factory_for(provider))

    assert status == 500
    assert body == {"message": NETWORK_ERROR_MESSAGE}


def test_format_error_is_bad_gateway(config):
    provider = MockProvider(raise_error=ProviderFormatError("Response missing 'main' block"))

    body, status = handle_weather_request({"city": "Seoul"}, config, factory_for(provider))

    assert status == 502
    assert "main" in body["message"]


def test_api_key_never_in_body(config):
    provider = MockProvider(raise_error=ProviderError(401, "Invalid API key"))
    body, _ = handle_weather_request({"city": "Seoul"}, config, factory_for(provider))
    assert "secret-key" not in str(body)


def test_default_provider_factory_uses_config():
    config = Config(api_key="k", lang="en", timeout=3.0)

    provider = default_provider_factory(config)

    assert isinstance(provider, OpenWeatherProvider)
    assert provider.api_key == "k"
    assert provider.lang == "en"
    assert provider.units == "metric"
    assert provider.timeout == 3.0
