"""
Locale helpers

Pure functions for the site's two-locale (German/English) content model:
- locale normalization and the de <-> en alternate
- per-request locale selection (URL param > server default > cookie > default)
- reading values out of localized ``{locale: value}`` field maps
- Accept-Language header parsing with quality-value (q=) support
"""

from __future__ import annotations

from typing import Any

# ── Constants ─────────────────────────────────────────────────────────────────

SUPPORTED_LOCALES: tuple[str, ...] = ("de", "en")
DEFAULT_LOCALE = "de"

LANGUAGE_NAMES: dict[str, str] = {
    "de": "Deutsch",
    "en": "English",
}


# ── Locale selection ──────────────────────────────────────────────────────────


def is_supported_locale(value: Any) -> bool:
    return isinstance(value, str) and value in SUPPORTED_LOCALES


def normalize_locale(value: Any, default: str = DEFAULT_LOCALE) -> str:
    """Return ``value`` if it is a supported locale, otherwise ``default``."""
    return value if is_supported_locale(value) else default


def alternate_locale(locale: str) -> str:
    """Return the other supported locale: "de" -> "en", "en" -> "de"."""
    return "en" if locale == "de" else "de"


def resolve_locale(
    url_param: str | None,
    server_default: str | None,
    cookie_value: str | None,
    default: str = DEFAULT_LOCALE,
) -> str:
    """Pick the locale for one request.

    The first supported value wins, in this order:
    1. ``?lang=`` URL parameter
    2. a locale the server already decided on (e.g. an explicit header)
    3. the locale cookie
    4. ``default``

    Unsupported or empty values at any step are skipped.
    """
    for candidate in (url_param, server_default, cookie_value):
        if is_supported_locale(candidate):
            return candidate
    return normalize_locale(default)


# ── Localized field values ────────────────────────────────────────────────────


def localized_value(value: Any, locale: str, fallback: str = "") -> str:
    """Read a localized field.

    Documents fetched with a locale carry plain strings; documents fetched
    without one carry ``{"de": ..., "en": ...}`` maps. For maps the requested
    locale is tried first, then German, then English.
    """
    if value is None:
        return fallback
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in (locale, "de", "en"):
            candidate = value.get(key)
            if isinstance(candidate, str) and candidate:
                return candidate
        return fallback
    return str(value)


def has_localized_text(value: Any) -> bool:
    """True when a string, or any entry of a localized map, is non-blank."""
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, dict):
        return any(isinstance(v, str) and v.strip() for v in value.values())
    return False


# ── Accept-Language ───────────────────────────────────────────────────────────


def parse_accept_language(header: str, supported: list[str] | tuple[str, ...] = SUPPORTED_LOCALES) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "de-AT,de;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Locale codes the site supports.

    Returns:
        The best matching locale from `supported`, or None.
    """
    if not header:
        return None

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        weighted.append((q, tag.strip()))

    # Stable sort keeps header order for equal q-values
    weighted.sort(key=lambda x: x[0], reverse=True)

    supported_lower = [s.lower() for s in supported]

    for _, tag in weighted:
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def get_language_info(locale: str) -> dict[str, str]:
    return {"code": locale, "name": LANGUAGE_NAMES.get(locale, locale)}
