"""
Shared fakes for screensaver tests.

Time is driven by ManualScheduler, so nothing here waits on the wall clock.
"""

import asyncio
import itertools
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Sequence, Tuple

import pytest

from wallpanel.app.exceptions import ImageFetchError
from wallpanel.app.i18n import Translator
from wallpanel.app.modules.weather import WeatherSnapshot
from wallpanel.app.saver import DisplayModeController
from wallpanel.app.saver.interfaces import (
    ModalButton,
    ModalPresenter,
    Region,
    ScreenSaverView,
    WebCallbacks,
    WebRenderer,
    WebSettings,
)
from wallpanel.app.saver.timers import Scheduler


class ManualHandle:
    def __init__(self, when: float, seq: int, callback: Callable[[], None]):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Scheduler whose clock only moves when a test calls advance()."""

    def __init__(self):
        self.time = 0.0
        self._seq = itertools.count()
        self._handles: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.time + delay, next(self._seq), callback)
        self._handles.append(handle)
        return handle

    def spawn(self, coro):
        return asyncio.ensure_future(coro)

    @property
    def pending(self) -> List[ManualHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = [h for h in self.pending if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._handles.remove(handle)
            self.time = max(self.time, handle.when)
            handle.callback()
        self.time = target


class FakeView(ScreenSaverView):
    def __init__(self, scheduler: ManualScheduler, size: Tuple[int, int] = (800, 480)):
        self.scheduler = scheduler
        self.size = size
        self.visible = {region: None for region in Region}
        self.clock_updates: List[Tuple[float, str, str]] = []
        self.weather_text: Optional[str] = None
        self.size_requests: List[float] = []
        self.photos: List[Any] = []
        self.notices: List[str] = []

    def set_region_visible(self, region: Region, visible: bool) -> None:
        self.visible[region] = visible

    def set_clock_text(self, time_text: str, date_text: str) -> None:
        self.clock_updates.append((self.scheduler.time, time_text, date_text))

    def set_weather_text(self, text: str) -> None:
        self.weather_text = text

    def photo_region_size(self) -> Tuple[int, int]:
        self.size_requests.append(self.scheduler.time)
        return self.size

    def show_photo(self, image: Any) -> None:
        self.photos.append(image)

    def show_notice(self, message: str) -> None:
        self.notices.append(message)


class FakeModal(ModalPresenter):
    """Modal whose answers are given by the test through answer()."""

    def __init__(self):
        self.requests: List[Tuple[str, str, Sequence[ModalButton], asyncio.Future]] = []

    async def present(self, title, message, buttons):
        future = asyncio.get_running_loop().create_future()
        self.requests.append((title, message, list(buttons), future))
        return await future

    def answer(self, button: ModalButton, index: int = -1) -> None:
        self.requests[index][3].set_result(button)


class FakeRenderer(WebRenderer):
    def __init__(self):
        self.calls: List[str] = []
        self.settings: Optional[WebSettings] = None
        self.callbacks: Optional[WebCallbacks] = None
        self.loaded: List[str] = []

    def apply_settings(self, settings: WebSettings) -> None:
        self.calls.append("apply_settings")
        self.settings = settings

    def clear_cache(self, include_disk_files: bool = True) -> None:
        self.calls.append(f"clear_cache:{include_disk_files}")

    def clear_cookies(self) -> None:
        self.calls.append("clear_cookies")

    def bind(self, callbacks: WebCallbacks) -> None:
        self.calls.append("bind")
        self.callbacks = callbacks

    def load_url(self, url: str) -> None:
        self.calls.append("load_url")
        self.loaded.append(url)


class FakeFetcher:
    def __init__(self):
        self.requests: List[Tuple[int, int]] = []
        self.fail = False
        self.gate: Optional[asyncio.Event] = None

    async def fetch(self, width: int, height: int):
        self.requests.append((width, height))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise ImageFetchError("source unreachable")
        return f"photo-{len(self.requests)}"


class FakeTlsHandle:
    def __init__(self):
        self.proceeded = 0
        self.cancelled = 0

    def proceed(self) -> None:
        self.proceeded += 1

    def cancel(self) -> None:
        self.cancelled += 1


class FakeAlertResult:
    def __init__(self):
        self.confirmed = False

    def confirm(self) -> None:
        self.confirmed = True


async def drain(rounds: int = 5) -> None:
    """Let spawned tasks run to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class Harness:
    def __init__(self, start: datetime):
        self.start = start
        self.scheduler = ManualScheduler()
        self.view = FakeView(self.scheduler)
        self.modal = FakeModal()
        self.renderer = FakeRenderer()
        self.fetcher = FakeFetcher()
        self.controller = DisplayModeController(
            view=self.view,
            modal=self.modal,
            renderer=self.renderer,
            fetcher=self.fetcher,
            translator=Translator("en"),
            scheduler=self.scheduler,
            now=self.now,
            photo_startup_delay=0.01,
        )

    def now(self) -> datetime:
        return self.start + timedelta(seconds=self.scheduler.time)


@pytest.fixture
def make_harness():
    def factory(second: int = 17) -> Harness:
        return Harness(datetime(2026, 10, 19, 9, 41, second))

    return factory


@pytest.fixture
def harness(make_harness) -> Harness:
    return make_harness()


@pytest.fixture
def weather() -> WeatherSnapshot:
    return WeatherSnapshot(current_temperature="18", current_conditions="Cloudy")


def config(**overrides) -> dict:
    base = {
        "web_enabled": False,
        "web_url": "https://panel.example/dashboard",
        "wallpaper_enabled": False,
        "clock_enabled": False,
        "rotation_interval_seconds": 5,
    }
    base.update(overrides)
    return base
