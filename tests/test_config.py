"""Application configuration loading"""

import pytest

from wallpanel.app.exceptions import ConfigurationError
from wallpanel.app.utils import config as config_module
from wallpanel.app.utils.config import Config, MqttConfig, PhotoConfig, ScreenSaverConfig


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.delenv("WALLPANEL_CONFIG", raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


class TestConfig:
    def test_defaults(self):
        config = Config()

        assert config.screensaver.clock_enabled
        assert config.screensaver.rotation_interval_seconds == 900
        assert config.photos.startup_delay_ms == 10
        assert config.mqtt.base_topic == "wallpanel/mywallpanel/"

    def test_from_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[screensaver]\n"
            "web_enabled = true\n"
            'web_url = "https://panel.example"\n'
            "rotation_interval_seconds = 30\n"
            "[language]\n"
            'default_language = "ru"\n'
        )

        config = Config.from_toml(path)

        assert config.screensaver.web_enabled
        assert config.screensaver.rotation_interval_seconds == 30
        assert config.language.default_language == "ru"

    def test_missing_toml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_toml(tmp_path / "nope.toml")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("WALLPANEL_SCREENSAVER__WALLPAPER_ENABLED", "true")

        assert Config().screensaver.wallpaper_enabled

    def test_invalid_rotation_interval(self):
        with pytest.raises(ConfigurationError):
            ScreenSaverConfig(rotation_interval_seconds=0)

    def test_photo_template_needs_placeholders(self):
        with pytest.raises(ConfigurationError):
            PhotoConfig(source_url_template="http://photos.example/random")

    def test_load_config_is_cached(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[web]\nuser_agent = \"Panel\"\n")

        first = config_module.load_config(path)

        assert first.web.user_agent == "Panel"
        assert config_module.get_config() is first

    def test_load_config_without_file(self, tmp_path):
        config = config_module.load_config(tmp_path / "absent.toml")

        assert config.web.user_agent == ""


class TestLanguageAndMqtt:
    def test_supported_language_is_used(self):
        config = Config(language={"default_language": "ru"})

        assert config.language.effective_language() == "ru"

    def test_unsupported_language_falls_back(self):
        config = Config(language={"default_language": "de", "fallback_language": "en"})

        assert config.language.effective_language() == "en"

    def test_empty_base_topic(self):
        with pytest.raises(ConfigurationError):
            MqttConfig(base_topic="/")
