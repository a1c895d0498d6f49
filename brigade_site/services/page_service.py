"""
Page Service: write boundary for menu pages

Pages are saved through prepare_page() (slug generation) and
validate_page() (menu hierarchy rules). The rules only apply to pages
being saved as published, drafts may be incomplete, except that a page
can never become its own menu parent.

Published top item:
    - needs a menu label in at least one locale
    - has no menu parent
    - title, slug and content are all present or all absent
Published sub item:
    - needs title, description, content and slug
    - needs a menu parent, and that parent must be a top item
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from brigade_site.exceptions import MenuStructureError, PageNotFoundError
from brigade_site.i18n.locale import has_localized_text
from brigade_site.models.page import Page
from brigade_site.models.status import PublishStatus
from brigade_site.schemas.page import PageCreate, PageUpdate
from brigade_site.services.category_service import normalize_id
from brigade_site.utils.slugify import slugify_localized

logger = logging.getLogger(__name__)

ParentLookup = Callable[[int], Awaitable[Any]]

EDITABLE_FIELDS = ("is_top_item", "menu_label", "title", "slug", "description", "content", "menu_parent", "status")


def has_rich_content(value: Any) -> bool:
    """True when a localized rich-text map holds a document in any locale."""
    if not isinstance(value, dict) or not value:
        return False
    return any(isinstance(entry, dict) and entry for entry in value.values())


def prepare_page(data: dict[str, Any]) -> dict[str, Any]:
    """Generate a slug from the title for every locale that has none."""
    if isinstance(data.get("title"), dict):
        slugs = slugify_localized(data["title"], data.get("slug"))
        if slugs:
            data["slug"] = slugs
    return data


def _is_published(data: dict[str, Any]) -> bool:
    status = data.get("status")
    return status == PublishStatus.PUBLISHED or status == PublishStatus.PUBLISHED.value


def _validate_top_item(data: dict[str, Any]) -> None:
    if not has_localized_text(data.get("menu_label")):
        raise MenuStructureError("Menu label is required for top menu items when publishing", field="menu_label")

    if data.get("menu_parent") is not None:
        raise MenuStructureError("Top menu items cannot have a parent", field="menu_parent")

    has_title = has_localized_text(data.get("title"))
    has_slug = has_localized_text(data.get("slug"))
    has_content = has_rich_content(data.get("content"))
    if has_title or has_slug or has_content:
        if not has_title:
            raise MenuStructureError("Title is required for top menu items when content is provided", field="title")
        if not has_slug:
            raise MenuStructureError("Slug is required for top menu items when content is provided", field="slug")
        if not has_content:
            raise MenuStructureError(
                "Content is required for top menu items when title/slug is provided", field="content"
            )


async def _validate_sub_item(data: dict[str, Any], parent_lookup: ParentLookup | None) -> None:
    for name, label, present in (
        ("title", "Title", has_localized_text(data.get("title"))),
        ("description", "Description", has_localized_text(data.get("description"))),
        ("content", "Content", has_rich_content(data.get("content"))),
        ("slug", "Slug", has_localized_text(data.get("slug"))),
    ):
        if not present:
            raise MenuStructureError(f"{label} is required for submenu items when publishing", field=name)

    parent_id = normalize_id(data.get("menu_parent"))
    if parent_id is None:
        raise MenuStructureError("Submenu items must have a menu parent selected when publishing", field="menu_parent")

    if parent_lookup is None:
        return
    try:
        parent = await parent_lookup(parent_id)
    except Exception as exc:
        # The parent may be saved later; its own save is validated then
        logger.warning("Could not look up menu parent %s: %s", parent_id, exc)
        return
    if parent is None:
        logger.warning("Menu parent %s does not exist yet", parent_id)
        return
    is_top = parent.get("is_top_item") if isinstance(parent, dict) else getattr(parent, "is_top_item", None)
    if is_top is not True:
        raise MenuStructureError("Menu parent must be a top item", field="menu_parent")


async def validate_page(
    data: dict[str, Any],
    *,
    original_id: int | None = None,
    parent_lookup: ParentLookup | None = None,
) -> None:
    """Raise MenuStructureError if saving ``data`` would break the menu hierarchy."""
    if _is_published(data):
        if data.get("is_top_item") is True:
            _validate_top_item(data)
        else:
            await _validate_sub_item(data, parent_lookup)

    if original_id is not None and normalize_id(data.get("menu_parent")) == original_id:
        raise MenuStructureError("A page cannot be its own menu parent", field="menu_parent")


def _page_state(page: Page) -> dict[str, Any]:
    return {
        "is_top_item": page.is_top_item,
        "menu_label": page.menu_label,
        "title": page.title,
        "slug": page.slug,
        "description": page.description,
        "content": page.content,
        "menu_parent": page.menu_parent_id,
        "status": page.status,
    }


async def save_page(
    db: AsyncSession,
    data: PageCreate | PageUpdate,
    *,
    page_id: int | None = None,
) -> Page:
    """Create (``page_id is None``) or partially update a page after validation."""
    if page_id is None:
        page = Page()
        state = data.model_dump()
    else:
        page = await db.get(Page, page_id)
        if page is None:
            raise PageNotFoundError(page_id)
        state = _page_state(page)
        state.update(data.model_dump(exclude_unset=True))

    state = prepare_page(state)

    async def lookup(parent_id: int) -> Page | None:
        return await db.get(Page, parent_id)

    await validate_page(state, original_id=page_id, parent_lookup=lookup)

    for name in EDITABLE_FIELDS:
        if name == "menu_parent":
            page.menu_parent_id = normalize_id(state.get("menu_parent"))
        else:
            setattr(page, name, state.get(name))
    if page.is_top_item is None:
        page.is_top_item = False
    if page.status is None:
        page.status = PublishStatus.DRAFT

    db.add(page)
    try:
        await db.commit()
    except Exception as e:
        await db.rollback()
        logger.error(f"Error saving page: {str(e)}")
        raise
    await db.refresh(page)
    logger.info(f"Page saved successfully: {page.id}")
    return page
