"""
Language Detection Middleware

Sets request.state.locale once per request using resolve_locale():
  1. ``?lang=`` query parameter
  2. ``X-Language`` header (a locale chosen upstream, e.g. by a proxy)
  3. locale cookie
  4. Accept-Language best match, else settings.default_locale

No DB lookups, pure header parsing. Routes read the result through the
get_locale() dependency and pass it explicitly into every resolver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from brigade_site.config import settings
from brigade_site.i18n.locale import parse_accept_language, resolve_locale

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


def detect_locale(request: Request) -> str:
    default = (
        parse_accept_language(request.headers.get("Accept-Language", ""), settings.supported_locales)
        or settings.default_locale
    )
    return resolve_locale(
        request.query_params.get("lang"),
        request.headers.get("X-Language", "").strip() or None,
        request.cookies.get(settings.locale_cookie_name),
        default=default,
    )


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and attach it to request.state.locale."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.locale = detect_locale(request)
        return await call_next(request)
