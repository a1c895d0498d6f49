"""
Post pages: ``/{category}/{slug}``

Registered last in main.py because the two-segment pattern would shadow
every other route.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends

from brigade_site.dependencies import get_locale, get_retry_policy, get_store
from brigade_site.services.category_service import category_label, category_path
from brigade_site.services.menu_service import load_menu, serialize_menu
from brigade_site.services.resolution_service import resolve_post_page
from brigade_site.services.retry import RetryPolicy
from brigade_site.services.sibling_navigator import post_link
from brigade_site.store import Document, DocumentStore

router = APIRouter()
logger = logging.getLogger(__name__)


def _sibling_summary(post: Document | None, locale: str) -> dict | None:
    if post is None:
        return None
    return {"id": post["id"], "title": post.get("title"), "href": post_link(post, locale)}


@router.get("/{category}/{slug}")
async def get_post(
    category: str,
    slug: str,
    locale: str = Depends(get_locale),
    store: DocumentStore = Depends(get_store),
    policy: RetryPolicy = Depends(get_retry_policy),
):
    # The menu uses a disjoint data set, so it is built alongside the post chain
    page, menu = await asyncio.gather(
        resolve_post_page(store, category, slug, locale, policy=policy),
        load_menu(store, locale, policy=policy),
    )
    resolution = page.resolution
    if resolution.is_fallback:
        logger.info("Serving post %s in %s for a %s request", page.post["id"], resolution.resolved_locale, locale)

    return {
        "post": page.post,
        "category": {
            "id": page.category["id"],
            "label": category_label(page.category, locale),
            "path": category_path(page.category, locale),
        },
        "previous": _sibling_summary(page.siblings.previous, locale),
        "next": _sibling_summary(page.siblings.next, locale),
        "locale": locale,
        "resolvedLocale": resolution.resolved_locale,
        "localeFallback": resolution.is_fallback,
        "navigation": serialize_menu(menu),
    }
