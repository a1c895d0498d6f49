"""
Sibling Navigator

Previous/next links between published posts of one category. Posts are
ordered by a single effective timestamp, the publish date or, for
undated posts, the creation date, so dated and undated posts interleave
consistently. Ties on the timestamp are broken by id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from brigade_site.i18n.locale import localized_value
from brigade_site.models.status import PublishStatus
from brigade_site.services.category_service import category_path, normalize_id
from brigade_site.services.retry import RetryPolicy, with_retry
from brigade_site.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Siblings:
    previous: Document | None = None
    next: Document | None = None


def effective_date(document: Document) -> datetime | None:
    published = document.get("publishedDate")
    return published if published is not None else document.get("createdAt")


async def _neighbour(
    store: DocumentStore,
    collection: str,
    category_id: int,
    document_id: int,
    key: datetime,
    locale: str,
    *,
    older: bool,
    policy: RetryPolicy,
) -> Document | None:
    comparison = "less_than" if older else "greater_than"
    where = {
        "and": [
            {"category": {"equals": category_id}},
            {"status": {"equals": PublishStatus.PUBLISHED.value}},
            {
                "or": [
                    {"sortDate": {comparison: key}},
                    {"and": [{"sortDate": {"equals": key}}, {"id": {comparison: document_id}}]},
                ]
            },
        ]
    }
    result = await with_retry(
        policy,
        lambda: store.find(
            collection,
            where,
            limit=1,
            depth=1,
            sort="-sortDate" if older else "sortDate",
            locale=locale,
        ),
    )
    return result.first


async def find_siblings(
    store: DocumentStore,
    document: Document,
    locale: str,
    *,
    collection: str = "posts",
    policy: RetryPolicy | None = None,
) -> Siblings:
    """Closest older and newer published post in the document's category.

    Never raises: any failure is logged and yields empty navigation.
    """
    policy = policy or RetryPolicy.from_settings()
    try:
        category_id = normalize_id(document.get("category"))
        key = effective_date(document)
        if category_id is None or key is None:
            return Siblings()

        previous = await _neighbour(
            store, collection, category_id, document["id"], key, locale, older=True, policy=policy
        )
        following = await _neighbour(
            store, collection, category_id, document["id"], key, locale, older=False, policy=policy
        )
        return Siblings(previous=previous, next=following)
    except Exception:
        logger.exception("Error fetching previous/next posts for %s %s", collection, document.get("id"))
        return Siblings()


def post_link(post: Document, locale: str) -> str:
    """``/{category}/{slug}?lang=xx``; the id stands in for a missing slug."""
    slug = localized_value(post.get("slug"), locale) or str(post.get("id", ""))
    return f"/{category_path(post.get('category'), locale)}/{slug}?lang={locale}"
