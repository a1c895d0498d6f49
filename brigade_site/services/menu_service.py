"""
Menu Service: two-level site navigation

Builds the navigation from a flat list of page records. Top items form
the first level, sub items hang below the top item named by their
``menuParent``. The node types only allow that shape: a SubItem has no
children, so deeper nesting cannot be represented.

Structural rules are enforced when pages are published (see
page_service). Here the records are trusted; a sub item whose parent is
missing, or whose label or slug is empty, is dropped from the menu.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Union

from brigade_site.config import settings
from brigade_site.i18n.locale import has_localized_text, localized_value
from brigade_site.models.status import PublishStatus
from brigade_site.services.category_service import normalize_id
from brigade_site.services.retry import RetryPolicy, with_retry
from brigade_site.store.base import Document, DocumentStore

logger = logging.getLogger(__name__)

CONTACT_LABEL = "CONTACT"


class NavKind(str, enum.Enum):
    LINK_DROPDOWN = "link_dropdown"  # clickable and has children
    LINK = "link"
    DROPDOWN = "dropdown"  # label-only container
    LABEL = "label"  # inert
    CONTACT = "contact"


@dataclass(frozen=True)
class SubItem:
    label: str
    href: str


@dataclass(frozen=True)
class TopItem:
    label: str
    href: str | None = None
    children: tuple[SubItem, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> NavKind:
        if self.href and self.children:
            return NavKind.LINK_DROPDOWN
        if self.href:
            return NavKind.LINK
        if self.children:
            return NavKind.DROPDOWN
        return NavKind.LABEL


@dataclass(frozen=True)
class ContactItem:
    label: str
    href: str

    @property
    def kind(self) -> NavKind:
        return NavKind.CONTACT


MenuNode = Union[TopItem, ContactItem]


def page_href(slug: str) -> str:
    return f"/pages/{slug}"


def _top_label(page: Document, locale: str) -> str:
    return localized_value(page.get("menuLabel"), locale)


def _sub_label(page: Document, locale: str) -> str:
    return localized_value(page.get("menuLabel"), locale) or localized_value(page.get("title"), locale)


def contact_item() -> ContactItem:
    """Trailing entry, identical in every locale."""
    return ContactItem(label=CONTACT_LABEL, href=settings.contact_path)


def build_menu(page_records: list[Document], locale: str) -> list[MenuNode]:
    """Assemble the navigation for one render. Stateless and never raises on bad records."""
    menu_pages = [page for page in page_records if has_localized_text(page.get("menuLabel"))]
    top_items = [page for page in menu_pages if page.get("isTopItem") is True]
    sub_items = [page for page in menu_pages if page.get("isTopItem") is False]

    top_items.sort(key=lambda page: _top_label(page, locale).casefold())

    menu: list[MenuNode] = []
    for top in top_items:
        label = _top_label(top, locale).strip()
        if not label:
            continue
        top_id = normalize_id(top.get("id"))

        children = [
            sub for sub in sub_items
            if top_id is not None and normalize_id(sub.get("menuParent")) == top_id
        ]
        children.sort(key=lambda page: _sub_label(page, locale).casefold())

        entries = []
        for child in children:
            child_label = _sub_label(child, locale).strip()
            child_slug = localized_value(child.get("slug"), locale).strip()
            if not child_label or not child_slug:
                logger.warning("Dropping menu entry for page %s: missing label or slug", child.get("id"))
                continue
            entries.append(SubItem(label=child_label, href=page_href(child_slug)))

        slug = localized_value(top.get("slug"), locale).strip()
        menu.append(
            TopItem(
                label=label.upper(),
                href=page_href(slug) if slug else None,
                children=tuple(entries),
            )
        )

    attached = {id(child) for child in sub_items if _parent_in(child, top_items)}
    for orphan in (sub for sub in sub_items if id(sub) not in attached):
        logger.warning("Dropping sub item %s: parent %r is not a top item", orphan.get("id"), orphan.get("menuParent"))

    menu.append(contact_item())
    return menu


def _parent_in(page: Document, top_items: list[Document]) -> bool:
    parent_id = normalize_id(page.get("menuParent"))
    return parent_id is not None and any(normalize_id(top.get("id")) == parent_id for top in top_items)


async def load_menu(
    store: DocumentStore,
    locale: str,
    *,
    policy: RetryPolicy | None = None,
) -> list[MenuNode]:
    """Read every published page and build the menu; on failure only Contact remains."""
    policy = policy or RetryPolicy.from_settings()
    try:
        result = await with_retry(
            policy,
            lambda: store.find(
                "pages",
                {"status": {"equals": PublishStatus.PUBLISHED.value}},
                limit=settings.menu_page_limit,
            ),
        )
    except Exception:
        logger.exception("Error loading pages for navigation")
        return [contact_item()]
    return build_menu(result.docs, locale)


def serialize_menu(menu: list[MenuNode]) -> list[dict[str, Any]]:
    items = []
    for node in menu:
        item: dict[str, Any] = {"kind": node.kind.value, "label": node.label, "href": node.href}
        if isinstance(node, TopItem):
            item["children"] = [{"label": child.label, "href": child.href} for child in node.children]
        items.append(item)
    return items
