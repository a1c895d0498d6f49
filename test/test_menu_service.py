"""
Tests for menu assembly from page records
"""

import pytest

from brigade_site.models import PublishStatus
from brigade_site.services.menu_service import (
    ContactItem,
    NavKind,
    SubItem,
    TopItem,
    build_menu,
    load_menu,
    serialize_menu,
)


def top(page_id, label, slug=None, **extra):
    record = {"id": page_id, "isTopItem": True, "menuLabel": {"de": label, "en": label}}
    if slug:
        record["slug"] = {"de": slug, "en": slug}
    record.update(extra)
    return record


def sub(page_id, parent, *, label=None, title=None, slug="seite", **extra):
    record = {
        "id": page_id,
        "isTopItem": False,
        "menuLabel": {"de": label or "", "en": label or ""},
        "title": {"de": title or "", "en": title or ""},
        "slug": {"de": slug, "en": slug},
        "menuParent": parent,
    }
    record.update(extra)
    return record


class TestBuildMenu:
    def test_empty_input_gives_only_contact(self):
        menu = build_menu([], "de")

        assert menu == [ContactItem(label="CONTACT", href="/kontakt")]

    def test_contact_label_same_in_every_locale(self):
        assert build_menu([], "en")[-1] == build_menu([], "de")[-1]

    def test_four_top_item_kinds(self):
        records = [
            top(1, "Aktuelles", slug="aktuelles"),
            top(2, "Blog", slug="blog"),
            top(3, "Chronik"),
            top(4, "Dienste"),
            sub(10, 1, label="Termine", slug="termine"),
            sub(11, 3, label="Gründung", slug="gruendung"),
        ]

        menu = build_menu(records, "de")

        assert [item.kind for item in menu] == [
            NavKind.LINK_DROPDOWN,
            NavKind.LINK,
            NavKind.DROPDOWN,
            NavKind.LABEL,
            NavKind.CONTACT,
        ]
        assert menu[0].href == "/pages/aktuelles"
        assert menu[2].href is None
        assert menu[2].children == (SubItem(label="Gründung", href="/pages/gruendung"),)

    def test_top_items_sorted_case_insensitively_and_upper_cased(self):
        records = [top(1, "verein"), top(2, "Aktuelles"), top(3, "Über uns"), top(4, "einsätze")]

        labels = [item.label for item in build_menu(records, "de")[:-1]]

        assert labels == ["AKTUELLES", "EINSÄTZE", "VEREIN", "ÜBER UNS"]

    def test_child_label_prefers_menu_label_over_title(self):
        records = [
            top(1, "Verein"),
            sub(10, 1, label="Vorstand", title="Der Vorstand", slug="vorstand"),
            sub(11, 1, label="Satzung", title="Unsere Satzung", slug="satzung"),
        ]

        children = build_menu(records, "de")[0].children

        assert [child.label for child in children] == ["Satzung", "Vorstand"]

    def test_child_without_menu_label_is_not_a_menu_page(self):
        # Only records with a menu label take part in the menu at all
        records = [top(1, "Verein"), {"id": 12, "isTopItem": False, "title": {"de": "X"}, "menuParent": 1}]

        assert build_menu(records, "de")[0].children == ()

    def test_parent_as_bare_id_or_document(self):
        records = [
            top(1, "Verein"),
            sub(10, 1, label="A", slug="a"),
            sub(11, {"id": 1, "isTopItem": True}, label="B", slug="b"),
            sub(12, "1", label="C", slug="c"),
        ]

        children = build_menu(records, "de")[0].children

        assert [child.label for child in children] == ["A", "B", "C"]

    def test_orphans_dropped(self):
        records = [
            top(1, "Verein"),
            sub(10, 99, label="Verwaist", slug="verwaist"),
            sub(11, None, label="Ohne", slug="ohne"),
        ]

        menu = build_menu(records, "de")

        assert menu[0].children == ()
        assert len(menu) == 2

    def test_sub_item_of_sub_item_not_nested(self):
        records = [
            top(1, "Verein"),
            sub(10, 1, label="Vorstand", slug="vorstand"),
            sub(11, 10, label="Kassenwart", slug="kassenwart"),
        ]

        menu = build_menu(records, "de")

        assert [child.label for child in menu[0].children] == ["Vorstand"]
        assert all(not hasattr(child, "children") for child in menu[0].children)

    def test_child_without_slug_dropped(self):
        records = [top(1, "Verein"), sub(10, 1, label="Leer", slug="")]

        assert build_menu(records, "de")[0].children == ()

    def test_missing_is_top_item_ignored(self):
        records = [{"id": 1, "menuLabel": {"de": "Unklar"}}]

        assert build_menu(records, "de") == [ContactItem(label="CONTACT", href="/kontakt")]

    def test_locale_fallback_for_labels(self):
        records = [{"id": 1, "isTopItem": True, "menuLabel": {"de": "Verein", "en": ""}}]

        assert build_menu(records, "en")[0].label == "VEREIN"

    def test_contact_is_last(self):
        menu = build_menu([top(1, "Zug"), top(2, "Amt")], "de")

        assert isinstance(menu[-1], ContactItem)
        assert all(isinstance(item, TopItem) for item in menu[:-1])


class TestLoadMenu:
    @pytest.mark.asyncio
    async def test_reads_published_pages(self, store, test_db, seed, no_wait_policy):
        verein = await seed.page(test_db, is_top_item=True, menu_label={"de": "Verein", "en": "Club"})
        await seed.page(
            test_db,
            is_top_item=False,
            menu_label={"de": "Vorstand", "en": "Board"},
            title={"de": "Vorstand", "en": "Board"},
            slug={"de": "vorstand", "en": "board"},
            menu_parent_id=verein.id,
        )
        await seed.page(test_db, is_top_item=True, menu_label={"de": "Entwurf"}, status=PublishStatus.DRAFT)

        menu = await load_menu(store, "en", policy=no_wait_policy)

        assert [item.label for item in menu] == ["CLUB", "CONTACT"]
        assert menu[0].children == (SubItem(label="Board", href="/pages/board"),)

    @pytest.mark.asyncio
    async def test_store_failure_leaves_contact(self, no_wait_policy):
        class BrokenStore:
            async def find(self, *args, **kwargs):
                raise RuntimeError("no database")

        menu = await load_menu(BrokenStore(), "de", policy=no_wait_policy)

        assert menu == [ContactItem(label="CONTACT", href="/kontakt")]


class TestSerializeMenu:
    def test_shape(self):
        menu = build_menu([top(1, "Verein", slug="verein"), sub(10, 1, label="Vorstand", slug="vorstand")], "de")

        assert serialize_menu(menu) == [
            {
                "kind": "link_dropdown",
                "label": "VEREIN",
                "href": "/pages/verein",
                "children": [{"label": "Vorstand", "href": "/pages/vorstand"}],
            },
            {"kind": "contact", "label": "CONTACT", "href": "/kontakt"},
        ]
