"""
Screensaver display controller.

Decides which layer of the overlay is active (rotating photos, web page
or nothing), keeps the clock overlay ticking on minute boundaries and
rotates wallpaper on a fixed interval. Rendering is delegated to the
host's view, modal presenter, web renderer and photo fetcher.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Set, Tuple

from ..display import DisplayConfig, DisplayMode, select_mode
from ..exceptions import ImageFetchError, RenderError
from ..i18n import Translator
from ..modules.weather import WeatherSnapshot
from ..utils.logger import get_logger
from .interfaces import (
    AlertResult,
    ModalButton,
    ModalPresenter,
    Region,
    ScreenSaverView,
    TlsDecisionHandle,
    TlsError,
    TlsErrorKind,
    WebCallbacks,
    WebRenderer,
    WebSettings,
)
from .photos import PhotoFetcher
from .timers import AsyncioScheduler, Scheduler, TimerGroup

logger = get_logger("saver.controller")

CLOCK_TIMER = "clock"
PHOTO_TIMER = "photo"

DEFAULT_PHOTO_STARTUP_DELAY = 0.01

_TLS_MESSAGE_KEYS = {
    TlsErrorKind.UNTRUSTED: "dialogs.ssl.untrusted",
    TlsErrorKind.EXPIRED: "dialogs.ssl.expired",
    TlsErrorKind.ID_MISMATCH: "dialogs.ssl.mismatch",
    TlsErrorKind.NOT_YET_VALID: "dialogs.ssl.not_yet_valid",
}


class TlsDecisionCache:
    """
    Remembers whether the user chose to trust the page's certificate.

    Only a trust answer suppresses later prompts; a cancel answer puts the
    cache back to undecided.
    """

    def __init__(self):
        self.last_decision_was_trust = False

    def record(self, trusted: bool) -> None:
        self.last_decision_was_trust = trusted

    def reset(self) -> None:
        self.last_decision_was_trust = False


class DisplayModeController:
    """
    Drives one screensaver overlay.

    Args:
        view: Overlay surface
        modal: Presenter for alert and certificate dialogs
        renderer: Embedded browser used by the web layer
        fetcher: Wallpaper photo source
        translator: Dialog strings and clock formatting
        scheduler: Timer/task scheduling (defaults to the running asyncio loop)
        now: Wall-clock source
        photo_startup_delay: Seconds before the first wallpaper fetch
        user_agent: Optional user agent override for the web layer
    """

    def __init__(
        self,
        view: ScreenSaverView,
        modal: ModalPresenter,
        renderer: WebRenderer,
        fetcher: PhotoFetcher,
        translator: Optional[Translator] = None,
        scheduler: Optional[Scheduler] = None,
        now: Callable[[], datetime] = datetime.now,
        photo_startup_delay: float = DEFAULT_PHOTO_STARTUP_DELAY,
        user_agent: str = "",
    ):
        self.view = view
        self.modal = modal
        self.renderer = renderer
        self.fetcher = fetcher
        self.translator = translator or Translator("en")
        self.scheduler = scheduler or AsyncioScheduler()
        self.now = now
        self.photo_startup_delay = photo_startup_delay
        self.user_agent = user_agent

        self.timers = TimerGroup(self.scheduler)
        self.tls_cache = TlsDecisionCache()
        self.config: Optional[DisplayConfig] = None
        self.weather: Optional[WeatherSnapshot] = None
        self.mode = DisplayMode.INACTIVE
        self.clock_visible = False

        self._pending: Set["asyncio.Future[Any]"] = set()
        self._dismiss_listeners: List[Callable[[], None]] = []
        self._navigation_error_listeners: List[Callable[[str], None]] = []

    # ------------------------------------------------------------------
    # Signals

    def on_dismiss_requested(self, listener: Callable[[], None]) -> None:
        self._dismiss_listeners.append(listener)

    def on_navigation_error(self, listener: Callable[[str], None]) -> None:
        self._navigation_error_listeners.append(listener)

    def _emit_dismiss_requested(self) -> None:
        for listener in list(self._dismiss_listeners):
            listener()

    def _emit_navigation_error(self, description: str) -> None:
        for listener in list(self._navigation_error_listeners):
            listener(description)

    # ------------------------------------------------------------------
    # Lifecycle

    @property
    def state(self) -> Tuple[DisplayMode, bool]:
        """(background mode, clock overlay shown)"""
        return self.mode, self.clock_visible

    def activate(
        self,
        config: DisplayConfig | Mapping[str, Any],
        weather: WeatherSnapshot,
    ) -> None:
        """
        Start (or restart) the overlay with config and weather.

        Everything from a previous activation is replaced, including the
        certificate trust decision.

        Raises:
            ConfigurationError: If config is invalid; the running overlay
                is left untouched
        """
        config = DisplayConfig.coerce(config)

        self._cancel_schedules()
        self.tls_cache.reset()
        self.config = config
        self.weather = weather

        if config.clock_enabled:
            self.clock_visible = True
            self.view.set_region_visible(Region.CLOCK, True)
            self._update_clock()
            self.view.set_weather_text(weather.weather_line())
            self.timers.schedule_recurring(
                CLOCK_TIMER,
                self._seconds_to_next_minute(),
                self._update_clock,
                self._seconds_to_next_minute,
            )
        else:
            self.clock_visible = False
            self.view.set_region_visible(Region.CLOCK, False)

        self.mode = select_mode(config)
        if self.mode is DisplayMode.PHOTO_ROTATING:
            self.view.set_region_visible(Region.PHOTO, True)
            self.view.set_region_visible(Region.WEB, False)
            self.timers.schedule_recurring(
                PHOTO_TIMER,
                self.photo_startup_delay,
                self._rotate_photo,
                config.rotation_interval_seconds,
            )
        elif self.mode is DisplayMode.WEB_ACTIVE:
            self.view.set_region_visible(Region.PHOTO, False)
            self.view.set_region_visible(Region.WEB, True)
            self._start_web(config.web_url)
        else:
            self.view.set_region_visible(Region.PHOTO, False)
            self.view.set_region_visible(Region.WEB, False)

        logger.info(
            f"Screensaver activated: mode={self.mode.value} clock={self.clock_visible} "
            f"epoch={self.timers.epoch}"
        )

    def teardown(self) -> None:
        """Stop all timers and pending work. Safe to call from any state."""
        self._cancel_schedules()
        self.tls_cache.reset()
        self.mode = DisplayMode.INACTIVE
        self.clock_visible = False
        logger.debug("Screensaver torn down")

    def _cancel_schedules(self) -> None:
        self.timers.cancel_all()
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    def _track(self, task: "asyncio.Future[Any]") -> None:
        self._pending.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: "asyncio.Future[Any]") -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Screensaver task failed", exc_info=task.exception())

    # ------------------------------------------------------------------
    # Clock

    def _seconds_to_next_minute(self) -> int:
        return 60 - self.now().second

    def _update_clock(self) -> None:
        moment = self.now()
        self.view.set_clock_text(
            self.translator.format_time(moment),
            self.translator.format_weekday_date(moment),
        )

    # ------------------------------------------------------------------
    # Wallpaper

    def _rotate_photo(self) -> None:
        width, height = self.view.photo_region_size()
        if width <= 0 or height <= 0:
            logger.debug("Photo region not measured yet, skipping rotation")
            return
        self._track(self.scheduler.spawn(self._fetch_photo(width, height, self.timers.epoch)))

    async def _fetch_photo(self, width: int, height: int, epoch: int) -> None:
        try:
            image = await self.fetcher.fetch(width, height)
        except ImageFetchError as e:
            logger.warning(f"Wallpaper refresh failed, retrying next rotation: {e}")
            return

        if epoch != self.timers.epoch:
            logger.debug("Discarding photo fetched for a superseded activation")
            return
        self.view.show_photo(image)

    # ------------------------------------------------------------------
    # Web page

    @property
    def _web_live(self) -> bool:
        return self.mode is DisplayMode.WEB_ACTIVE

    def _start_web(self, url: str) -> None:
        logger.debug(f"Loading web screensaver {url}")
        self.renderer.apply_settings(WebSettings(user_agent=self.user_agent or None))
        self.renderer.clear_cache(include_disk_files=True)
        self.renderer.clear_cookies()
        self.renderer.bind(WebCallbacks(
            on_alert=self._on_alert,
            on_tls_error=self._on_tls_error,
            on_navigation_request=self._on_navigation_request,
            on_navigation_error=self._on_navigation_error,
            on_touch=self._on_touch,
        ))
        try:
            self.renderer.load_url(url)
        except RenderError as e:
            logger.error(f"Web screensaver failed to load {url}: {e}")
            self.view.show_notice(e.message)

    def _on_alert(self, url: str, message: str, result: AlertResult) -> bool:
        if not self._web_live:
            result.confirm()
            return True
        title = self.translator.t("dialogs.alert.title", url=url)
        self._track(self.scheduler.spawn(self._present_alert(title, message, result)))
        return True

    async def _present_alert(self, title: str, message: str, result: AlertResult) -> None:
        try:
            await self.modal.present(title, message, [ModalButton.OK])
        finally:
            result.confirm()

    def _tls_message(self, kind: TlsErrorKind) -> str:
        key = _TLS_MESSAGE_KEYS.get(kind, "dialogs.ssl.generic")
        return self.translator.t(key) + self.translator.t("dialogs.ssl.continue")

    def _on_tls_error(self, error: TlsError, handler: TlsDecisionHandle) -> None:
        if not self._web_live:
            logger.info("Certificate error after the web screensaver closed, cancelling load")
            handler.cancel()
            return
        if self.tls_cache.last_decision_was_trust:
            # Page refreshes after a trust answer must not prompt again
            handler.proceed()
            return
        self._track(self.scheduler.spawn(self._prompt_tls(error, handler, self.timers.epoch)))

    async def _prompt_tls(self, error: TlsError, handler: TlsDecisionHandle, epoch: int) -> None:
        logger.info(f"Certificate error ({error.kind.value}) for {error.url or 'web screensaver'}")
        try:
            choice = await self.modal.present(
                self.translator.t("dialogs.ssl.title"),
                self._tls_message(error.kind),
                [ModalButton.PROCEED, ModalButton.CANCEL],
            )
        except asyncio.CancelledError:
            handler.cancel()
            raise
        except Exception as e:
            logger.error(f"Certificate prompt failed: {e}", exc_info=True)
            handler.cancel()
            return

        if epoch != self.timers.epoch:
            logger.info("Certificate answer arrived after the screensaver changed, cancelling load")
            handler.cancel()
            return

        if choice is ModalButton.PROCEED:
            self.tls_cache.record(True)
            handler.proceed()
        else:
            self.tls_cache.record(False)
            handler.cancel()

    def _on_navigation_request(self, url: str) -> bool:
        if not self._web_live:
            return True
        # Keep links inside the screensaver instead of an external browser
        try:
            self.renderer.load_url(url)
        except RenderError as e:
            logger.error(f"Web screensaver failed to navigate to {url}: {e}")
            self.view.show_notice(e.message)
        return True

    def _on_navigation_error(self, code: int, description: str, failing_url: str) -> None:
        if not self._web_live:
            return
        logger.warning(f"Web screensaver error {code} for {failing_url}: {description}")
        self.view.show_notice(description)
        self._emit_navigation_error(description)

    def _on_touch(self) -> bool:
        if self._web_live:
            self._emit_dismiss_requested()
        return False
