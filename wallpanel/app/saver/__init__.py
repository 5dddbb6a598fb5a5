"""
Screensaver package.

- DisplayModeController: mode selection, clock and wallpaper timers, web callbacks
- TimerGroup: epoch-keyed recurring timers
- PhotoFetcher: fresh wallpaper images
- interfaces: what a host has to implement
"""

from .controller import DisplayModeController, TlsDecisionCache
from .interfaces import (
    ModalButton,
    ModalPresenter,
    Region,
    ScreenSaverView,
    TlsError,
    TlsErrorKind,
    WebCallbacks,
    WebRenderer,
    WebSettings,
)
from .photos import PhotoFetcher
from .timers import AsyncioScheduler, Scheduler, TimerGroup

__all__ = [
    'DisplayModeController',
    'TlsDecisionCache',
    'ModalButton',
    'ModalPresenter',
    'Region',
    'ScreenSaverView',
    'TlsError',
    'TlsErrorKind',
    'WebCallbacks',
    'WebRenderer',
    'WebSettings',
    'PhotoFetcher',
    'AsyncioScheduler',
    'Scheduler',
    'TimerGroup',
]
