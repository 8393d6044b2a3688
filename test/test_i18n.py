"""
Internationalization tests

Pure locale helpers and request language detection. No database.
"""

from __future__ import annotations

import pytest
from starlette.requests import Request

from galatide.config import settings
from galatide.i18n.locale import (
    BUILTIN_LANGUAGES,
    get_language_info,
    is_rtl_locale,
    parse_accept_language,
)
from galatide.middleware.language import detect_language, get_request_language

SUPPORTED = ["en", "ar", "zh", "ru", "de", "fr", "hi"]


def _request(query: str = "", headers: dict[str, str] | None = None) -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/articles",
            "query_string": query.encode(),
            "headers": raw_headers,
        }
    )


# ══════════════════════════════════════════════════════════════════════════════
# 1. Locale helpers
# ══════════════════════════════════════════════════════════════════════════════


class TestIsRtl:
    @pytest.mark.parametrize("code", ["ar", "he", "fa", "ur", "ar-SA", "AR"])
    def test_rtl(self, code):
        assert is_rtl_locale(code) is True

    @pytest.mark.parametrize("code", ["en", "fr", "zh", "en-US"])
    def test_ltr(self, code):
        assert is_rtl_locale(code) is False


class TestParseAcceptLanguage:
    def test_exact_match(self):
        assert parse_accept_language("fr", SUPPORTED) == "fr"

    def test_quality_ordering(self):
        assert parse_accept_language("de;q=0.5,fr;q=0.9", SUPPORTED) == "fr"

    def test_region_falls_back_to_base(self):
        assert parse_accept_language("fr-CA,en;q=0.8", SUPPORTED) == "fr"

    def test_header_order_kept_for_equal_quality(self):
        assert parse_accept_language("ru,de", SUPPORTED) == "ru"

    def test_unsupported(self):
        assert parse_accept_language("ja,ko;q=0.9", SUPPORTED) is None

    def test_empty_header(self):
        assert parse_accept_language("", SUPPORTED) is None

    def test_bad_quality_counts_as_one(self):
        assert parse_accept_language("de;q=0.5,fr;q=abc", SUPPORTED) == "fr"


class TestLanguageInfo:
    def test_builtin(self):
        assert get_language_info("ar") == {
            "code": "ar",
            "name": "Arabic",
            "native_name": "العربية",
            "is_rtl": True,
        }

    def test_unknown_code(self):
        info = get_language_info("xx")

        assert info["name"] == "xx"
        assert info["native_name"] == "xx"
        assert info["is_rtl"] is False

    def test_builtins_match_supported_defaults(self):
        assert set(BUILTIN_LANGUAGES) == set(settings.supported_languages)


# ══════════════════════════════════════════════════════════════════════════════
# 2. Request language detection
# ══════════════════════════════════════════════════════════════════════════════


class TestDetectLanguage:
    def test_query_parameter_wins(self):
        request = _request("lang=de", {"X-Language": "fr", "Accept-Language": "ru"})
        assert detect_language(request) == "de"

    def test_header_before_accept_language(self):
        request = _request(headers={"X-Language": "FR", "Accept-Language": "ru"})
        assert detect_language(request) == "fr"

    def test_accept_language(self):
        assert detect_language(_request(headers={"Accept-Language": "ar-EG,en;q=0.5"})) == "ar"

    def test_unsupported_values_are_skipped(self):
        request = _request("lang=ja", {"X-Language": "ko", "Accept-Language": "zh"})
        assert detect_language(request) == "zh"

    def test_default(self):
        assert detect_language(_request()) == settings.default_language

    def test_request_language_outside_middleware(self):
        assert get_request_language(_request()) == settings.default_language
