"""
Weather data shown under the screensaver clock.

Acquisition happens elsewhere; the screensaver only receives a populated
snapshot once per activation.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ConfigurationError


class WeatherSnapshot(BaseModel):
    """
    Read-only weather values, all kept as display strings.

    An empty current_temperature means the temperature is unknown.
    """

    model_config = ConfigDict(frozen=True)

    current_temperature: str = ""
    current_conditions: str = ""
    high_temperature: str = ""
    low_temperature: str = ""
    wind_direction: str = ""
    wind_speed: str = ""
    chance_of_precip: str = ""

    def weather_line(self) -> str:
        """Return '18°C, Cloudy', or '' when the temperature is unknown."""
        if self.current_temperature == "":
            return ""
        return f"{self.current_temperature}°C, {self.current_conditions}"

    @classmethod
    def from_json(cls, data: str | bytes) -> "WeatherSnapshot":
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid weather snapshot: {e}") from e

    @classmethod
    def from_file(cls, path: str | Path) -> "WeatherSnapshot":
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Weather snapshot not found: {path}")
        return cls.from_json(path.read_bytes())
