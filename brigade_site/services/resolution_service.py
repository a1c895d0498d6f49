"""
Resolution Service

Ties the resolvers together for one page request:

    category segment -> category -> post (locale fallback) -> siblings

The three steps run in sequence because each needs the previous result.
Any store failure during resolution is logged and reported as not found,
so a render never fails with a generic error because of the database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from brigade_site.exceptions import (
    CategoryNotFoundError,
    PageNotFoundError,
    PostNotFoundError,
)
from brigade_site.services.category_service import resolve_category
from brigade_site.services.post_resolver import Resolution, resolve_by_slug
from brigade_site.services.retry import RetryPolicy
from brigade_site.services.sibling_navigator import Siblings, find_siblings
from brigade_site.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostPage:
    category: Document
    resolution: Resolution
    siblings: Siblings

    @property
    def post(self) -> Document:
        return self.resolution.document


async def resolve_post_page(
    store: DocumentStore,
    category_segment: str,
    slug: str,
    locale: str,
    *,
    policy: RetryPolicy | None = None,
) -> PostPage:
    """Resolve everything a post page needs.

    Raises:
        CategoryNotFoundError: no category matches ``category_segment``.
        PostNotFoundError: no published post matches ``slug`` in that category.
    """
    policy = policy or RetryPolicy.from_settings()

    try:
        category = await resolve_category(store, category_segment, locale, policy=policy)
    except Exception:
        logger.exception("Category lookup for '%s' failed", category_segment)
        category = None
    if category is None:
        raise CategoryNotFoundError(category_segment)

    try:
        resolution = await resolve_by_slug(store, "posts", slug, category, locale, policy=policy)
    except Exception:
        logger.exception("Post lookup for '%s/%s' failed", category_segment, slug)
        resolution = None
    if resolution is None:
        raise PostNotFoundError(slug)

    siblings = await find_siblings(store, resolution.document, locale, policy=policy)
    return PostPage(category=category, resolution=resolution, siblings=siblings)


async def resolve_page(
    store: DocumentStore,
    slug: str,
    locale: str,
    *,
    policy: RetryPolicy | None = None,
) -> Resolution:
    """Resolve a standalone content page by slug, with the same locale fallback as posts."""
    try:
        resolution = await resolve_by_slug(store, "pages", slug, None, locale, depth=1, policy=policy)
    except Exception:
        logger.exception("Page lookup for '%s' failed", slug)
        resolution = None
    if resolution is None:
        raise PageNotFoundError(slug)
    return resolution
