from fastapi import APIRouter, Depends

from brigade_site.dependencies import get_locale, get_retry_policy, get_store
from brigade_site.i18n import SUPPORTED_LOCALES, get_language_info
from brigade_site.services.menu_service import load_menu, serialize_menu
from brigade_site.services.retry import RetryPolicy
from brigade_site.store import DocumentStore

router = APIRouter()


@router.get("/navigation")
async def get_navigation(
    locale: str = Depends(get_locale),
    store: DocumentStore = Depends(get_store),
    policy: RetryPolicy = Depends(get_retry_policy),
):
    menu = await load_menu(store, locale, policy=policy)
    return {
        "locale": locale,
        "items": serialize_menu(menu),
        # Entries for the language switcher
        "languages": [get_language_info(code) for code in SUPPORTED_LOCALES],
    }
