"""Mapping between document field names and the SQLAlchemy models."""

from __future__ import annotations

from dataclasses import dataclass, field

from brigade_site.exceptions import UnsupportedCollectionError
from brigade_site.models import Category, Page, Post


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    model: type
    # document key -> model attribute, in output order
    fields: dict[str, str]
    localized: frozenset[str] = frozenset()
    # document key -> target collection
    relations: dict[str, str] = field(default_factory=dict)
    # queryable/sortable but not part of the document
    computed: dict[str, str] = field(default_factory=dict)
    date_fields: frozenset[str] = frozenset({"createdAt", "updatedAt"})

    def attribute(self, key: str) -> str:
        if key in self.fields:
            return self.fields[key]
        if key in self.computed:
            return self.computed[key]
        raise UnsupportedCollectionError(self.name, key)


CATEGORIES = CollectionSpec(
    name="categories",
    model=Category,
    fields={
        "id": "id",
        "name": "name",
        "slug": "slug",
        "active": "active",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    localized=frozenset({"name", "slug"}),
)

POSTS = CollectionSpec(
    name="posts",
    model=Post,
    fields={
        "id": "id",
        "title": "title",
        "slug": "slug",
        "content": "content",
        "metaTitle": "meta_title",
        "metaDescription": "meta_description",
        "category": "category_id",
        "status": "status",
        "publishedDate": "published_date",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    localized=frozenset({"title", "slug", "content", "metaTitle", "metaDescription"}),
    relations={"category": "categories"},
    computed={"sortDate": "sort_date"},
    date_fields=frozenset({"publishedDate", "createdAt", "updatedAt", "sortDate"}),
)

PAGES = CollectionSpec(
    name="pages",
    model=Page,
    fields={
        "id": "id",
        "isTopItem": "is_top_item",
        "menuLabel": "menu_label",
        "title": "title",
        "slug": "slug",
        "description": "description",
        "content": "content",
        "menuParent": "menu_parent_id",
        "status": "status",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    },
    localized=frozenset({"menuLabel", "title", "slug", "description", "content"}),
    relations={"menuParent": "pages"},
)

COLLECTIONS: dict[str, CollectionSpec] = {spec.name: spec for spec in (CATEGORIES, POSTS, PAGES)}


def get_collection(name: str) -> CollectionSpec:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise UnsupportedCollectionError(name) from None
