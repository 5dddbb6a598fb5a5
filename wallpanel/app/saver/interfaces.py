"""
Host-side collaborators of the screensaver.

A host (Android bridge, desktop shell, headless runner) implements the
view surface, the modal presenter and the web renderer. Renderer events
come back through a WebCallbacks object of plain callables.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Sequence, Tuple


class Region(Enum):
    """Independently visible parts of the screensaver overlay."""

    CLOCK = "clock"
    PHOTO = "photo"
    WEB = "web"


class ModalButton(Enum):
    OK = "ok"
    PROCEED = "proceed"
    CANCEL = "cancel"


class CacheMode(Enum):
    DEFAULT = "default"
    NO_CACHE = "no_cache"


class TlsErrorKind(Enum):
    """Certificate validation failures a renderer can report."""

    UNTRUSTED = "untrusted"
    EXPIRED = "expired"
    ID_MISMATCH = "mismatch"
    NOT_YET_VALID = "not_yet_valid"
    OTHER = "generic"


@dataclass(frozen=True)
class TlsError:
    kind: TlsErrorKind
    url: str = ""


@dataclass
class WebSettings:
    """Settings applied to the renderer before every screensaver page load."""

    javascript_enabled: bool = True
    dom_storage_enabled: bool = True
    database_enabled: bool = True
    cache_mode: CacheMode = CacheMode.NO_CACHE
    javascript_can_open_windows: bool = True
    mixed_content_allowed: bool = True
    user_agent: Optional[str] = None


class AlertResult(Protocol):
    """Continuation the renderer waits on while a script alert is shown."""

    def confirm(self) -> None: ...


class TlsDecisionHandle(Protocol):
    """Pending load blocked on a certificate decision."""

    def proceed(self) -> None: ...

    def cancel(self) -> None: ...


@dataclass
class WebCallbacks:
    """
    Named callback slots a renderer invokes.

    Attributes:
        on_alert: (url, message, result) -> True if the native dialog is
            suppressed
        on_tls_error: (error, handler) -> None
        on_navigation_request: (url) -> True if the load was handled here
        on_navigation_error: (code, description, failing_url) -> None
        on_touch: () -> True if the touch was consumed
    """

    on_alert: Callable[[str, str, AlertResult], bool]
    on_tls_error: Callable[[TlsError, TlsDecisionHandle], None]
    on_navigation_request: Callable[[str], bool]
    on_navigation_error: Callable[[int, str, str], None]
    on_touch: Callable[[], bool]


class ScreenSaverView(ABC):
    """The overlay surface: regions, clock text, photo and notices."""

    @abstractmethod
    def set_region_visible(self, region: Region, visible: bool) -> None:
        pass

    @abstractmethod
    def set_clock_text(self, time_text: str, date_text: str) -> None:
        pass

    @abstractmethod
    def set_weather_text(self, text: str) -> None:
        pass

    @abstractmethod
    def photo_region_size(self) -> Tuple[int, int]:
        """Current pixel size (width, height) of the photo region."""

    @abstractmethod
    def show_photo(self, image: Any) -> None:
        pass

    @abstractmethod
    def show_notice(self, message: str) -> None:
        """Show a short-lived message (toast)."""


class ModalPresenter(ABC):
    @abstractmethod
    async def present(
        self, title: str, message: str, buttons: Sequence[ModalButton]
    ) -> ModalButton:
        """Show a modal dialog and return the button the user chose."""


class WebRenderer(ABC):
    """Stateful embedded browser session."""

    @abstractmethod
    def apply_settings(self, settings: WebSettings) -> None:
        pass

    @abstractmethod
    def clear_cache(self, include_disk_files: bool = True) -> None:
        pass

    @abstractmethod
    def clear_cookies(self) -> None:
        pass

    @abstractmethod
    def bind(self, callbacks: WebCallbacks) -> None:
        pass

    @abstractmethod
    def load_url(self, url: str) -> None:
        pass
