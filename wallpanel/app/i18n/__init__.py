"""
Internationalization (i18n) module for the panel
Provides dialog strings and locale-aware clock formatting
"""

from .translator import Translator

__all__ = ['Translator']
