"""
Category Service

Resolves the category segment of a post URL to a category document and
provides the label/path helpers used when linking to categories.

Category slugs are stable URL segments: they are matched against both
locales at once, independently of the locale the page is rendered in.
"""

from __future__ import annotations

import logging
from typing import Any

from brigade_site.config import settings
from brigade_site.exceptions import DocumentNotFoundError, QueryFailedError
from brigade_site.i18n.locale import SUPPORTED_LOCALES, localized_value
from brigade_site.services.retry import RetryPolicy, with_retry
from brigade_site.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)

COLLECTION = "categories"


def normalize_id(value: Any) -> int | None:
    """Reduce a relationship value to an integer id.

    Accepts a populated document (``{"id": 5, ...}``), an int, or a string of
    digits. Anything else, including bools, yields None.
    """
    if isinstance(value, dict):
        value = value.get("id")
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def is_canonical_id(segment: str) -> bool:
    """True for digit strings that are their own normalized form ("5", not "05")."""
    return segment.isdigit() and str(int(segment)) == segment


async def find_category_by_slug(
    store: DocumentStore,
    slug: str,
    locale: str,
    *,
    policy: RetryPolicy,
) -> Document | None:
    where = {"or": [{f"slug.{code}": {"equals": slug}} for code in SUPPORTED_LOCALES]}
    result = await with_retry(policy, lambda: store.find(COLLECTION, where, limit=1, locale=locale))
    return result.first


async def resolve_category(
    store: DocumentStore,
    path_segment: str | Document,
    locale: str,
    *,
    policy: RetryPolicy | None = None,
) -> Document | None:
    """Map a URL path segment to a category document, or None.

    ``path_segment`` may be an already-resolved category (returned as is), a
    canonical numeric id, or a slug in either locale. A numeric id that does
    not exist, or whose lookup keeps failing, falls back to a slug lookup,
    since a slug may be all digits.
    """
    policy = policy or RetryPolicy.from_settings()

    if isinstance(path_segment, dict):
        return path_segment

    segment = str(path_segment).strip()
    if not segment:
        return None

    if is_canonical_id(segment):
        try:
            return await with_retry(
                policy, lambda: store.find_by_id(COLLECTION, int(segment), locale=locale)
            )
        except DocumentNotFoundError:
            logger.debug("No category with id %s, trying slug lookup", segment)
        except QueryFailedError as exc:
            logger.warning("Category id lookup %s failed, trying slug lookup: %s", segment, exc)

    category = await find_category_by_slug(store, segment, locale, policy=policy)
    if category is None:
        logger.info("Category '%s' not found in any locale", segment)
    return category


async def get_active_categories(
    store: DocumentStore,
    locale: str,
    *,
    policy: RetryPolicy | None = None,
) -> list[Document]:
    policy = policy or RetryPolicy.from_settings()
    result = await with_retry(
        policy,
        lambda: store.find(COLLECTION, {"active": {"equals": True}}, limit=100, sort="name", locale=locale),
    )
    return result.docs


def category_label(category: Document | int | None, locale: str) -> str:
    """Display label with the first letter capitalized; empty for bare ids."""
    if not isinstance(category, dict):
        return ""
    label = localized_value(category.get("name"), locale)
    return label[:1].upper() + label[1:] if label else ""


def category_path(category: Document | int | None, locale: str) -> str:
    """URL segment for a category, falling back to the default news path."""
    if not isinstance(category, dict):
        return settings.default_category_path
    return localized_value(category.get("slug"), locale) or settings.default_category_path
