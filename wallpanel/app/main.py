#!/usr/bin/env python3

import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional

from .display import DisplayConfig
from .exceptions import ConfigurationError
from .hosts.headless import DecliningModal, HeadlessView, LoggingWebRenderer
from .i18n import Translator
from .modules.weather import WeatherSnapshot
from .saver import DisplayModeController, PhotoFetcher
from .utils.config import Config, load_config
from .utils.logger import setup_logging
from .utils.mqtt import command_topic


def load_weather(config: Config) -> WeatherSnapshot:
    if not config.weather.snapshot_path:
        return WeatherSnapshot()
    return WeatherSnapshot.from_file(config.weather.snapshot_path)


def build_controller(config: Config) -> DisplayModeController:
    return DisplayModeController(
        view=HeadlessView(),
        modal=DecliningModal(),
        renderer=LoggingWebRenderer(),
        fetcher=PhotoFetcher(
            config.photos.source_url_template,
            timeout=config.photos.fetch_timeout,
        ),
        translator=Translator(
            config.language.effective_language(),
            fallback_language=config.language.fallback_language,
        ),
        photo_startup_delay=config.photos.startup_delay_ms / 1000,
        user_agent=config.web.user_agent,
    )


async def main_async(config_path: Optional[str] = None) -> None:
    if config_path is None:
        config_path = sys.argv[1] if len(sys.argv) > 1 else "config.toml"

    if not Path(config_path).exists() and Path("config.example.toml").exists():
        config_path = "config.example.toml"

    config = load_config(config_path)
    logger = setup_logging()
    logger.info(f"Configuration loaded from {config_path}")
    if config.language.effective_language() != config.language.default_language:
        logger.warning(
            f"Language '{config.language.default_language}' is not supported, "
            f"using '{config.language.fallback_language}'"
        )
    logger.info(f"MQTT command topic: {command_topic(config.mqtt.base_topic)}")

    controller = build_controller(config)
    shutdown_event = asyncio.Event()

    def request_shutdown(reason: str) -> None:
        logger.info(f"Stopping screensaver: {reason}")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, request_shutdown, sig.name)

    controller.on_dismiss_requested(lambda: request_shutdown("dismiss requested"))

    try:
        controller.activate(DisplayConfig.from_settings(config.screensaver), load_weather(config))
        await shutdown_event.wait()
    finally:
        controller.teardown()
        logger.info("Shutdown complete")


def main() -> None:
    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        pass
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
