"""
Screensaver display configuration and mode selection.

This is the single source of truth for which presentation layer is
active: wallpaper takes priority over the web page, and the clock
overlay is independent of both.
"""

from enum import Enum
from typing import Any, Mapping, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..utils.config import ScreenSaverConfig


class DisplayMode(Enum):
    """Mutually exclusive background layers of the screensaver."""

    INACTIVE = "inactive"  # no background layer (clock overlay may still show)
    PHOTO_ROTATING = "photo"
    WEB_ACTIVE = "web"


class DisplayConfig(BaseModel):
    """
    Display configuration for one screensaver activation.

    Attributes:
        web_enabled: Show the embedded web page
        web_url: Page loaded when the web layer is active
        wallpaper_enabled: Show rotating photos (wins over web_enabled)
        clock_enabled: Show the clock overlay
        rotation_interval_seconds: Delay between wallpaper refreshes
    """

    model_config = ConfigDict(frozen=True)

    web_enabled: bool = False
    web_url: str = ""
    wallpaper_enabled: bool = False
    clock_enabled: bool = False
    rotation_interval_seconds: int = 900

    @field_validator('rotation_interval_seconds')
    @classmethod
    def validate_rotation_interval(cls, v: int) -> int:
        if v < 1:
            raise ConfigurationError(
                f"rotation_interval_seconds must be at least 1, got {v}",
                code="rotation_interval",
            )
        return v

    @property
    def mode(self) -> DisplayMode:
        return select_mode(self)

    @classmethod
    def coerce(cls, value: "DisplayConfig | Mapping[str, Any]") -> "DisplayConfig":
        """
        Validate value into a DisplayConfig.

        Instances are re-validated too, so one built with model_construct()
        cannot slip an invalid interval past activation.

        Raises:
            ConfigurationError: If any field is invalid
        """
        data = value.model_dump() if isinstance(value, DisplayConfig) else dict(value)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid display config: {e}") from e

    @classmethod
    def from_settings(cls, settings: "ScreenSaverConfig") -> "DisplayConfig":
        """Create display config from the application's screensaver section."""
        return cls.coerce(settings.model_dump())


def select_mode(config: DisplayConfig) -> DisplayMode:
    """
    Pick the background layer for config.

    Args:
        config: Validated display configuration

    Returns:
        PHOTO_ROTATING if wallpaper is enabled, else WEB_ACTIVE if the web
        page is enabled, else INACTIVE
    """
    if config.wallpaper_enabled:
        return DisplayMode.PHOTO_ROTATING
    if config.web_enabled:
        return DisplayMode.WEB_ACTIVE
    return DisplayMode.INACTIVE
