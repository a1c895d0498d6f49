"""
Post Resolver: locale fallback for localized slugs

A post URL carries a slug that exists per locale. Resolution order:

1. published post whose slug matches in the requested locale
   (re-fetched by id in that locale so every localized field agrees)
2. the same query in the alternate locale
3. the slug read as a numeric id, accepted only when published and in
   the requested category

Slug lookups always win over the id interpretation, so a post whose slug
is "42" is found before the post with id 42.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from brigade_site.config import settings
from brigade_site.exceptions import DocumentNotFoundError
from brigade_site.i18n.locale import alternate_locale
from brigade_site.models.status import PublishStatus
from brigade_site.services.category_service import normalize_id
from brigade_site.services.retry import RetryPolicy, with_retry
from brigade_site.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)

MATCHED_BY_SLUG = "slug"
MATCHED_BY_FALLBACK_SLUG = "fallback_slug"
MATCHED_BY_ID = "id"


@dataclass(frozen=True)
class Resolution:
    document: Document
    requested_locale: str
    resolved_locale: str
    matched_by: str

    @property
    def is_fallback(self) -> bool:
        """True when the localized fields are in another locale than requested."""
        return self.resolved_locale != self.requested_locale


def is_published(document: Document | None) -> bool:
    return bool(document) and document.get("status") == PublishStatus.PUBLISHED.value


def _slug_query(slug: str, category_id: int | None) -> dict[str, Any]:
    conditions: list[dict[str, Any]] = [
        {"slug": {"equals": slug}},
        {"status": {"equals": PublishStatus.PUBLISHED.value}},
    ]
    if category_id is not None:
        conditions.append({"category": {"equals": category_id}})
    return {"and": conditions}


async def _find_by_slug(
    store: DocumentStore,
    collection: str,
    slug: str,
    category_id: int | None,
    locale: str,
    depth: int,
    policy: RetryPolicy,
) -> Document | None:
    result = await with_retry(
        policy,
        lambda: store.find(collection, _slug_query(slug, category_id), limit=1, depth=depth, locale=locale),
    )
    return result.first


async def resolve_by_slug(
    store: DocumentStore,
    collection: str,
    slug: str,
    category_id: int | Document | None,
    requested_locale: str,
    *,
    depth: int | None = None,
    policy: RetryPolicy | None = None,
) -> Resolution | None:
    """Return the best published match for ``slug``, or None when nothing matches.

    ``requested_locale`` must already be normalized to a supported locale.
    Store errors (including QueryFailedError after exhausted retries)
    propagate to the caller.
    """
    policy = policy or RetryPolicy.from_settings()
    depth = settings.document_depth if depth is None else depth
    category_key = normalize_id(category_id)
    if category_id is not None and category_key is None:
        logger.warning("Unusable category reference %r, no post can match", category_id)
        return None

    # 1. Slug in the requested locale
    document = await _find_by_slug(store, collection, slug, category_key, requested_locale, depth, policy)
    if document is not None:
        try:
            localized = await with_retry(
                policy,
                lambda: store.find_by_id(collection, document["id"], depth=depth, locale=requested_locale),
            )
        except DocumentNotFoundError:
            localized = None
        if is_published(localized):
            document = localized
        return Resolution(document, requested_locale, requested_locale, MATCHED_BY_SLUG)

    # 2. Slug in the alternate locale
    fallback_locale = alternate_locale(requested_locale)
    document = await _find_by_slug(store, collection, slug, category_key, fallback_locale, depth, policy)
    if document is not None:
        logger.info(
            "Resolved %s '%s' via %s slug (requested %s)", collection, slug, fallback_locale, requested_locale
        )
        return Resolution(document, requested_locale, fallback_locale, MATCHED_BY_FALLBACK_SLUG)

    # 3. Slug as a numeric id, plain ASCII digits only
    if not (isinstance(slug, str) and slug.isascii() and slug.isdigit()):
        return None
    document_id = int(slug)

    try:
        document = await with_retry(
            policy,
            lambda: store.find_by_id(collection, document_id, depth=depth, locale=requested_locale),
        )
    except DocumentNotFoundError:
        return None

    if not is_published(document):
        return None
    # Compare normalized ids on both sides; anything unresolvable is a mismatch
    if category_key is not None and normalize_id(document.get("category")) != category_key:
        return None
    return Resolution(document, requested_locale, requested_locale, MATCHED_BY_ID)
