"""
Language Detection Middleware

Sets request.state.language from:
  1. ``lang`` query parameter
  2. X-Language request header
  3. Accept-Language header (quality-weighted, best-match)
  4. settings.default_language

Only codes in settings.supported_languages are accepted. No DB lookups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from galatide.config import settings
from galatide.i18n.locale import parse_accept_language

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


def detect_language(request: Request) -> str:
    for candidate in (request.query_params.get("lang", ""), request.headers.get("X-Language", "")):
        candidate = candidate.strip().lower()
        if candidate in settings.supported_languages:
            return candidate
    return (
        parse_accept_language(request.headers.get("Accept-Language", ""), settings.supported_languages)
        or settings.default_language
    )


class LanguageMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.language = detect_language(request)
        response = await call_next(request)
        response.headers["Content-Language"] = request.state.language
        return response


def get_request_language(request: Request) -> str:
    """FastAPI dependency: the detected language, or the default outside the middleware."""
    return getattr(request.state, "language", None) or settings.default_language
