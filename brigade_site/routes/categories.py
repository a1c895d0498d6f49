import logging

from fastapi import APIRouter, Depends

from brigade_site.dependencies import get_locale, get_retry_policy, get_store
from brigade_site.exceptions import QueryFailedError
from brigade_site.services.category_service import category_label, category_path, get_active_categories
from brigade_site.services.retry import RetryPolicy
from brigade_site.store import DocumentStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/categories")
async def list_categories(
    locale: str = Depends(get_locale),
    store: DocumentStore = Depends(get_store),
    policy: RetryPolicy = Depends(get_retry_policy),
):
    try:
        categories = await get_active_categories(store, locale, policy=policy)
    except QueryFailedError as exc:
        logger.error("Error fetching categories: %s", exc)
        categories = []
    return {
        "locale": locale,
        "categories": [
            {
                "id": category["id"],
                "label": category_label(category, locale),
                "path": category_path(category, locale),
            }
            for category in categories
        ],
    }
