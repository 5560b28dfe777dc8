"""Tests for the command-line entry point."""
import json
import logging
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
from unittest.mock import patch
from config import Config, ConfigurationError
from main import main, parse_args, setup_logging
from openweather_provider import OpenWeatherProvider
from proxy_client import HttpProxyClient
from weather_query import CityQuery


SEOUL_BODY = {
    "name": "Seoul",
    "weather": [{"description": "clear sky", "icon": "01d"}],
    "main": {"temp": 10.0, "feels_like": 8.5, "humidity": 65},
    "wind": {"speed": 3.1},
    "cod": 200,
}


class FakeOpenWeatherHandler(BaseHTTPRequestHandler):
    """Answers every GET with a fixed Current Weather payload."""

    def do_GET(self):
        body = json.dumps(SEOUL_BODY).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *_args):
        pass


@pytest.fixture
def fake_upstream():
    server = HTTPServer(("127.0.0.1", 0), FakeOpenWeatherHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_port}/data/2.5/weather"
    server.shutdown()
    server.server_close()


@pytest.fixture
def restore_urllib3_level():
    logger = logging.getLogger("urllib3")
    level = logger.level
    yield
    logger.setLevel(level)


def test_parse_args_defaults():
    args = parse_args([])

    assert args.host == "127.0.0.1"
    assert args.port == 5000
    assert args.proxy_url is None
    assert args.verbose is False


def test_main_runs_app():
    with patch('main.setup_logging'), \
         patch('main.load_config', return_value=Config(api_key="k")), \
         patch('main.create_app') as mock_create:
        main(["--port", "8080"])

    assert mock_create.call_args.kwargs["client"] is None
    mock_create.return_value.run.assert_called_once_with(host="127.0.0.1", port=8080, debug=False)


def test_main_with_remote_proxy():
    with patch('main.setup_logging'), \
         patch('main.load_config', return_value=Config(api_key=None, timeout=4.0)), \
         patch('main.create_app') as mock_create:
        main(["--proxy-url", "http://proxy:5000"])

    client = mock_create.call_args.kwargs["client"]
    assert isinstance(client, HttpProxyClient)
    assert client.url == "http://proxy:5000/api/weather"
    assert client.timeout == 4.0


def test_main_exits_on_bad_config():
    with patch('main.setup_logging'), \
         patch('main.load_config', side_effect=ConfigurationError("Invalid WEATHER_TIMEOUT: 'x'")):
        with pytest.raises(SystemExit):
            main([])


def test_setup_logging_quiets_urllib3(restore_urllib3_level):
    with patch('main.logging.basicConfig'):
        setup_logging(None, verbose=True)

    assert logging.getLogger("urllib3").getEffectiveLevel() >= logging.INFO


def test_verbose_logging_keeps_api_key_out_of_real_requests(fake_upstream, restore_urllib3_level, caplog):
    """A real HTTP round trip at DEBUG must not log the appid parameter."""
    with patch('main.logging.basicConfig'):
        setup_logging(None, verbose=True)
    caplog.set_level(logging.DEBUG)
    provider = OpenWeatherProvider(api_key="SUPERSECRET123")
    provider.BASE_URL = fake_upstream

    weather = provider.get_current(CityQuery("Seoul"))

    assert weather.location_name == "Seoul"
    assert caplog.records
    assert "SUPERSECRET123" not in caplog.text
