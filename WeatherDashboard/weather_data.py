"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, asdict
from typing import Any, Dict


ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"


@dataclass(frozen=True)
class WeatherData:
    """Current conditions for one location, as shown on the dashboard."""
    location_name: str
    condition_description: str  # e.g., "broken clouds", "light rain"
    condition_icon: str  # OpenWeather icon code, e.g., "04d"
    temperature_c: float
    feels_like_c: float
    humidity_percent: float
    wind_speed_ms: float

    @property
    def icon_url(self) -> str:
        """URL of the condition icon image (empty if the provider sent none)."""
        if not self.condition_icon:
            return ""
        return ICON_URL_TEMPLATE.format(icon=self.condition_icon)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON body returned by the proxy endpoint."""
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "WeatherData":
        """
        Rebuild from a proxy JSON body.

        Raises:
            KeyError: If a field is missing from the payload
            ValueError: If a numeric field cannot be converted
        """
        return cls(
            location_name=str(payload["location_name"]),
            condition_description=str(payload["condition_description"]),
            condition_icon=str(payload["condition_icon"]),
            temperature_c=float(payload["temperature_c"]),
            feels_like_c=float(payload["feels_like_c"]),
            humidity_percent=float(payload["humidity_percent"]),
            wind_speed_ms=float(payload["wind_speed_ms"]),
        )
