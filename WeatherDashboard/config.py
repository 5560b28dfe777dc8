"""Server-side configuration, loaded once at startup and read-only afterwards."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_LANG = "kr"
DEFAULT_TIMEOUT = 10.0


class ConfigurationError(Exception):
    """Raised when the server configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class Config:
    """Process-wide settings for the proxy and dashboard."""
    api_key: Optional[str]
    lang: str = DEFAULT_LANG
    units: str = "metric"  # the dashboard labels values in °C and m/s
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def __repr__(self) -> str:
        # Never let the key end up in a log line or traceback
        key = "set" if self.has_api_key else "missing"
        return f"Config(api_key=<{key}>, lang={self.lang!r}, units={self.units!r}, timeout={self.timeout})"


def load_config() -> Config:
    """
    Read configuration from the environment (and a ``.env`` file if present).

    A missing OPENWEATHER_API_KEY is not fatal here: the proxy endpoint reports
    it per request as a configuration error.

    Raises:
        ConfigurationError: If WEATHER_TIMEOUT is not a positive number
    """
    load_dotenv()
    api_key = os.getenv("OPENWEATHER_API_KEY") or None
    lang = os.getenv("WEATHER_LANG", DEFAULT_LANG)
    timeout_raw = os.getenv("WEATHER_TIMEOUT", str(DEFAULT_TIMEOUT))

    try:
        timeout = float(timeout_raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid WEATHER_TIMEOUT: {timeout_raw!r}") from exc
    if timeout <= 0:
        raise ConfigurationError(f"WEATHER_TIMEOUT must be positive, got {timeout}")

    config = Config(api_key=api_key, lang=lang, timeout=timeout)
    logging.info("Configuration loaded: %r", config)
    return config
