"""
Custom exception hierarchy for the WallPanel screensaver.

This module provides a structured exception hierarchy for consistent
error handling across the application.
"""


class WallPanelException(Exception):
    """Base exception for all WallPanel errors."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(WallPanelException):
    """Configuration validation errors (invalid settings, missing values)."""

    pass


class ImageFetchError(WallPanelException):
    """Wallpaper image could not be fetched or decoded."""

    pass


class RenderError(WallPanelException):
    """A host renderer failed to carry out a display request."""

    pass
