import asyncio

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from brigade_site.database import get_db
from brigade_site.dependencies import get_locale, get_retry_policy, get_store
from brigade_site.schemas.page import PageCreate, PageResponse, PageUpdate
from brigade_site.services.menu_service import load_menu, serialize_menu
from brigade_site.services.page_service import save_page
from brigade_site.services.resolution_service import resolve_page
from brigade_site.services.retry import RetryPolicy
from brigade_site.store import DocumentStore

router = APIRouter()


@router.get("/pages/{slug}")
async def get_page(
    slug: str,
    locale: str = Depends(get_locale),
    store: DocumentStore = Depends(get_store),
    policy: RetryPolicy = Depends(get_retry_policy),
):
    resolution, menu = await asyncio.gather(
        resolve_page(store, slug, locale, policy=policy),
        load_menu(store, locale, policy=policy),
    )
    return {
        "page": resolution.document,
        "locale": locale,
        "resolvedLocale": resolution.resolved_locale,
        "localeFallback": resolution.is_fallback,
        "navigation": serialize_menu(menu),
    }


@router.post("/api/pages", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(page: PageCreate, db: AsyncSession = Depends(get_db)):
    return await save_page(db, page)


@router.patch("/api/pages/{page_id}", response_model=PageResponse)
async def update_page(page_id: int, page: PageUpdate, db: AsyncSession = Depends(get_db)):
    return await save_page(db, page, page_id=page_id)
