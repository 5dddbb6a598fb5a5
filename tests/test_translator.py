"""Dialog strings and locale-aware clock formatting"""

from datetime import datetime

import pytest

from wallpanel.app.i18n import Translator

MORNING = datetime(2026, 10, 19, 9, 5, 30)
EVENING = datetime(2026, 10, 19, 21, 42)


class TestFormatting:
    def test_english_time(self):
        t = Translator("en")

        assert t.format_time(MORNING) == "9:05 AM"
        assert t.format_time(EVENING) == "9:42 PM"
        assert t.format_time(datetime(2026, 1, 1, 0, 0)) == "12:00 AM"
        assert t.format_time(datetime(2026, 1, 1, 12, 30)) == "12:30 PM"

    def test_english_date(self):
        assert Translator("en").format_weekday_date(MORNING) == "Monday, October 19"

    def test_russian(self):
        t = Translator("ru")

        assert t.format_time(EVENING) == "21:42"
        assert t.format_weekday_date(MORNING) == "понедельник, 19 октября"


class TestLookup:
    def test_interpolation(self):
        t = Translator("en")

        assert t.t("dialogs.alert.title", url="https://a.example") == "Message from https://a.example"

    def test_missing_key(self):
        assert Translator("en").get("dialogs.nope") == "[dialogs.nope]"

    def test_fallback_language(self):
        t = Translator("xx")

        assert t.get("dialogs.ssl.title") == "Certificate error"

    def test_set_language(self):
        t = Translator("en")

        assert t.set_language("ru")
        assert t.get("buttons.cancel") == "Отмена"
        assert not t.set_language("xx")
        assert t.current_language == "ru"

    def test_available_languages(self):
        codes = {lang['code'] for lang in Translator().get_available_languages()}

        assert {"en", "ru"} <= codes

    @pytest.mark.parametrize("lang", ["en", "ru"])
    def test_all_tls_messages_present(self, lang):
        t = Translator(lang, fallback_language=lang)

        for key in ("title", "generic", "untrusted", "expired", "mismatch", "not_yet_valid", "continue"):
            assert not t.get(f"dialogs.ssl.{key}").startswith("[")

    def test_broken_template_returns_raw_text(self):
        t = Translator("en")
        t.translations["en"]["broken"] = "{0} of {"

        assert t.get("broken", url="https://a.example") == "{0} of {"
