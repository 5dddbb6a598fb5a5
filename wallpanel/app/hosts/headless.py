"""
Headless host for the screensaver.

Logs what a real display would show. Useful on a panel without a screen
attached and for checking a config file end to end.
"""

from typing import Any, Dict, Sequence, Tuple

from ..saver.interfaces import (
    ModalButton,
    ModalPresenter,
    Region,
    ScreenSaverView,
    WebCallbacks,
    WebRenderer,
    WebSettings,
)
from ..utils.logger import get_logger

logger = get_logger("hosts.headless")


class HeadlessView(ScreenSaverView):
    """Keeps the overlay state in memory and logs every change."""

    def __init__(self, width: int = 1280, height: int = 800):
        self.size = (width, height)
        self.visible: Dict[Region, bool] = {region: False for region in Region}
        self.time_text = ""
        self.date_text = ""
        self.weather_text = ""
        self.photo: Any = None
        self.photos_shown = 0

    def set_region_visible(self, region: Region, visible: bool) -> None:
        self.visible[region] = visible
        logger.debug(f"Region {region.value} {'shown' if visible else 'hidden'}")

    def set_clock_text(self, time_text: str, date_text: str) -> None:
        self.time_text = time_text
        self.date_text = date_text
        logger.info(f"Clock: {time_text} | {date_text}")

    def set_weather_text(self, text: str) -> None:
        self.weather_text = text
        if text:
            logger.info(f"Weather: {text}")

    def photo_region_size(self) -> Tuple[int, int]:
        return self.size

    def show_photo(self, image: Any) -> None:
        self.photo = image
        self.photos_shown += 1
        logger.info(f"Wallpaper #{self.photos_shown} shown")

    def show_notice(self, message: str) -> None:
        logger.warning(f"Notice: {message}")


class DecliningModal(ModalPresenter):
    """Answers every dialog with its most cautious button."""

    async def present(
        self, title: str, message: str, buttons: Sequence[ModalButton]
    ) -> ModalButton:
        choice = ModalButton.CANCEL if ModalButton.CANCEL in buttons else buttons[0]
        logger.info(f"Dialog '{title}': {message} -> {choice.value}")
        return choice


class LoggingWebRenderer(WebRenderer):
    """Records requested loads; renders nothing."""

    def __init__(self):
        self.settings: WebSettings | None = None
        self.callbacks: WebCallbacks | None = None
        self.loaded: list[str] = []

    def apply_settings(self, settings: WebSettings) -> None:
        self.settings = settings

    def clear_cache(self, include_disk_files: bool = True) -> None:
        logger.debug("Web cache cleared")

    def clear_cookies(self) -> None:
        logger.debug("Web cookies cleared")

    def bind(self, callbacks: WebCallbacks) -> None:
        self.callbacks = callbacks

    def load_url(self, url: str) -> None:
        self.loaded.append(url)
        logger.info(f"Web screensaver would load {url}")
