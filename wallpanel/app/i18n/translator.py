"""
Translator class for multi-language support on the panel
"""
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional
from ..utils.logger import get_logger

logger = get_logger("i18n.translator")

_RU_WEEKDAYS = ['понедельник', 'вторник', 'среда', 'четверг',
                'пятница', 'суббота', 'воскресенье']
_RU_MONTHS = ['января', 'февраля', 'марта', 'апреля', 'мая', 'июня',
              'июля', 'августа', 'сентября', 'октября', 'ноября', 'декабря']
_EN_WEEKDAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday',
                'Friday', 'Saturday', 'Sunday']
_EN_MONTHS = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
              'August', 'September', 'October', 'November', 'December']


class Translator:
    """Handles language translations and locale formatting for the panel"""

    def __init__(self, language: str = 'en', fallback_language: str = 'en'):
        self.current_language = language
        self.fallback_language = fallback_language
        self.translations: Dict[str, Dict] = {}
        self.languages_dir = Path(__file__).parent / 'languages'

        # Load the current and fallback languages
        self._load_language(fallback_language)
        if language != fallback_language:
            self._load_language(language)

    def _load_language(self, lang_code: str) -> bool:
        """Load a language file from JSON"""
        try:
            lang_file = self.languages_dir / f"{lang_code}.json"
            if lang_file.exists():
                with open(lang_file, 'r', encoding='utf-8') as f:
                    self.translations[lang_code] = json.load(f)
                logger.info(f"Loaded language: {lang_code}")
                return True
            else:
                logger.warning(f"Language file not found: {lang_code}")
                return False
        except (OSError, ValueError) as e:
            logger.error(f"Error loading language {lang_code}: {e}")
            return False

    def get(self, key: str, **kwargs) -> str:
        """
        Get a translated string by key

        Args:
            key: Dot-separated key path (e.g., 'dialogs.ssl.title')
            **kwargs: Values for string interpolation

        Returns:
            Translated and formatted string
        """
        # Try current language first
        text = self._get_from_dict(self.translations.get(self.current_language, {}), key)

        # Fall back to default language if not found
        if text is None and self.current_language != self.fallback_language:
            text = self._get_from_dict(self.translations.get(self.fallback_language, {}), key)

        # If still not found, return the key itself
        if text is None:
            logger.debug(f"Translation not found for key: {key}")
            return f"[{key}]"

        if kwargs:
            try:
                text = text.format(**kwargs)
            except KeyError as e:
                logger.error(f"Missing interpolation value: {e} for key: {key}")
            except (IndexError, ValueError) as e:
                logger.error(f"Error formatting translation {key}: {e}")

        return text

    def _get_from_dict(self, data: Dict, key: str) -> Optional[str]:
        """Navigate nested dictionary using dot notation"""
        keys = key.split('.')
        current = data

        for k in keys:
            if isinstance(current, dict) and k in current:
                current = current[k]
            else:
                return None

        return current if isinstance(current, str) else None

    def set_language(self, lang_code: str) -> bool:
        """Change the current language"""
        if lang_code not in self.translations:
            if not self._load_language(lang_code):
                return False

        self.current_language = lang_code
        logger.info(f"Language changed to: {lang_code}")
        return True

    def get_available_languages(self) -> List[Dict[str, str]]:
        """Get list of available languages"""
        languages = []

        for lang_file in sorted(self.languages_dir.glob("*.json")):
            lang_code = lang_file.stem
            try:
                with open(lang_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                    languages.append({
                        'code': lang_code,
                        'name': data.get('_metadata', {}).get('name', lang_code),
                        'native_name': data.get('_metadata', {}).get('native_name', lang_code)
                    })
            except (OSError, ValueError) as e:
                logger.error(f"Error reading language file {lang_file}: {e}")

        return languages

    def format_time(self, moment: datetime) -> str:
        """Format the time of day according to the current language's locale"""
        if self.current_language == 'ru':
            return moment.strftime('%H:%M')  # 24-hour format
        # 12-hour clock without a leading zero, like a wall clock
        hour = moment.hour % 12 or 12
        suffix = 'AM' if moment.hour < 12 else 'PM'
        return f"{hour}:{moment.minute:02d} {suffix}"

    def format_weekday_date(self, moment: datetime) -> str:
        """Format weekday, day and month according to the current language's locale"""
        if self.current_language == 'ru':
            weekday = _RU_WEEKDAYS[moment.weekday()]
            return f"{weekday}, {moment.day} {_RU_MONTHS[moment.month - 1]}"
        weekday = _EN_WEEKDAYS[moment.weekday()]
        return f"{weekday}, {_EN_MONTHS[moment.month - 1]} {moment.day}"

    # Shortcut method for convenience
    def t(self, key: str, **kwargs) -> str:
        """Shortcut for get() method"""
        return self.get(key, **kwargs)
