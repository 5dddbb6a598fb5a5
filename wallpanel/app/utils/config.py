import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError


class ScreenSaverConfig(BaseModel):
    """Screensaver layers shown while the panel is idle."""

    web_enabled: bool = False
    web_url: str = "about:blank"
    wallpaper_enabled: bool = False
    clock_enabled: bool = True
    rotation_interval_seconds: int = 900

    @field_validator('rotation_interval_seconds')
    @classmethod
    def validate_rotation_interval(cls, v: int) -> int:
        if v < 1:
            raise ConfigurationError(f"rotation_interval_seconds must be at least 1, got {v}")
        return v


class PhotoConfig(BaseModel):
    """Wallpaper image source with validation."""

    source_url_template: str = "http://picsum.photos/{width}/{height}?random"
    startup_delay_ms: int = 10
    fetch_timeout: int = 30

    @field_validator('source_url_template')
    @classmethod
    def validate_template(cls, v: str) -> str:
        if "{width}" not in v or "{height}" not in v:
            raise ConfigurationError(
                "source_url_template must contain {width} and {height} placeholders"
            )
        return v

    @field_validator('startup_delay_ms')
    @classmethod
    def validate_startup_delay(cls, v: int) -> int:
        if v < 0:
            raise ConfigurationError("startup_delay_ms cannot be negative")
        return v

    @field_validator('fetch_timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 1:
            raise ConfigurationError("fetch_timeout must be positive")
        return v


class WebConfig(BaseModel):
    user_agent: str = ""


class WeatherConfig(BaseModel):
    snapshot_path: Optional[str] = None


class LanguageConfig(BaseModel):
    default_language: str = "en"
    fallback_language: str = "en"
    supported_languages: list[str] = Field(default_factory=lambda: ["en", "ru"])

    def effective_language(self) -> str:
        """default_language if it is supported, else fallback_language."""
        if self.default_language in self.supported_languages:
            return self.default_language
        return self.fallback_language


class MqttConfig(BaseModel):
    base_topic: str = "wallpanel/mywallpanel/"

    @field_validator('base_topic')
    @classmethod
    def validate_base_topic(cls, v: str) -> str:
        if not v.strip("/"):
            raise ConfigurationError("mqtt.base_topic cannot be empty")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5
    error_report_path: Optional[str] = None


class Config(BaseSettings):
    screensaver: ScreenSaverConfig = Field(default_factory=ScreenSaverConfig)
    photos: PhotoConfig = Field(default_factory=PhotoConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    language: LanguageConfig = Field(default_factory=LanguageConfig)
    mqtt: MqttConfig = Field(default_factory=MqttConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WALLPANEL_",
        env_nested_delimiter="__",
    )

    @classmethod
    def from_toml(cls, path: str | Path) -> "Config":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = toml.load(f)

        return cls(**data)


_config: Optional[Config] = None


def load_config(path: Optional[str | Path] = None) -> Config:
    global _config
    if _config is None:
        if path is None:
            path = os.environ.get("WALLPANEL_CONFIG", "config.toml")

        config_path = Path(path)
        if config_path.exists():
            _config = Config.from_toml(config_path)
        else:
            _config = Config()

    return _config


def get_config() -> Config:
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next load reads it again."""
    global _config
    _config = None
