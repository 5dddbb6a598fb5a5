"""
Display configuration package.

Centralizes which screensaver layer is shown for a given configuration.
"""

from .mode import DisplayMode, DisplayConfig, select_mode

__all__ = [
    'DisplayMode',
    'DisplayConfig',
    'select_mode',
]
