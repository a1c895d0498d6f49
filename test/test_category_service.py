"""
Tests for category resolution and the category link helpers
"""

import pytest

from brigade_site.exceptions import QueryFailedError
from brigade_site.services.category_service import (
    category_label,
    category_path,
    get_active_categories,
    is_canonical_id,
    normalize_id,
    resolve_category,
)
from brigade_site.store.base import FindResult


class TestNormalizeId:
    def test_int(self):
        assert normalize_id(5) == 5

    def test_digit_string(self):
        assert normalize_id("5") == 5

    def test_populated_document(self):
        assert normalize_id({"id": 5, "slug": "einsatz"}) == 5

    def test_rejects_bool_and_garbage(self):
        assert normalize_id(True) is None
        assert normalize_id("abc") is None
        assert normalize_id(None) is None
        assert normalize_id({"slug": "einsatz"}) is None

    def test_canonical_id(self):
        assert is_canonical_id("5")
        assert not is_canonical_id("05")
        assert not is_canonical_id("news")


class TestResolveCategory:
    @pytest.mark.asyncio
    async def test_slug_in_either_locale_gives_same_category(self, store, test_db, seed, no_wait_policy):
        category = await seed.category(test_db, "einsatz", "operation")

        by_de = await resolve_category(store, "einsatz", "en", policy=no_wait_policy)
        by_en = await resolve_category(store, "operation", "de", policy=no_wait_policy)

        assert by_de["id"] == by_en["id"] == category.id

    @pytest.mark.asyncio
    async def test_numeric_id(self, store, test_db, seed, no_wait_policy):
        category = await seed.category(test_db, "einsatz", "operation")

        resolved = await resolve_category(store, str(category.id), "de", policy=no_wait_policy)

        assert resolved["id"] == category.id
        assert resolved["slug"] == "einsatz"

    @pytest.mark.asyncio
    async def test_missing_id_falls_back_to_slug(self, store, test_db, seed, no_wait_policy):
        category = await seed.category(test_db, "112", "112")

        resolved = await resolve_category(store, "112", "de", policy=no_wait_policy)

        assert resolved["id"] == category.id

    @pytest.mark.asyncio
    async def test_document_passes_through(self, store, no_wait_policy):
        document = {"id": 9, "slug": "x"}

        assert await resolve_category(store, document, "de", policy=no_wait_policy) is document

    @pytest.mark.asyncio
    async def test_not_found(self, store, test_db, seed, no_wait_policy):
        await seed.category(test_db, "einsatz", "operation")

        assert await resolve_category(store, "unbekannt", "de", policy=no_wait_policy) is None
        assert await resolve_category(store, "  ", "de", policy=no_wait_policy) is None

    @pytest.mark.asyncio
    async def test_persistent_timeout_raises_query_failed(self, no_wait_policy):
        class TimingOutStore:
            calls = 0

            async def find(self, *args, **kwargs):
                self.calls += 1
                raise TimeoutError("query timeout")

        store = TimingOutStore()
        with pytest.raises(QueryFailedError):
            await resolve_category(store, "einsatz", "de", policy=no_wait_policy)
        assert store.calls == 3

    @pytest.mark.asyncio
    async def test_failing_id_lookup_falls_back_to_slug(self, no_wait_policy):
        class IdLookupTimesOut:
            find_by_id_calls = 0

            async def find_by_id(self, *args, **kwargs):
                self.find_by_id_calls += 1
                raise TimeoutError("statement timeout")

            async def find(self, collection, where=None, **kwargs):
                return FindResult(docs=[{"id": 7, "slug": "2024"}], total_docs=1)

        store = IdLookupTimesOut()
        resolved = await resolve_category(store, "2024", "de", policy=no_wait_policy)

        assert resolved == {"id": 7, "slug": "2024"}
        assert store.find_by_id_calls == 3

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried(self, no_wait_policy):
        class FlakyStore:
            calls = 0

            async def find(self, *args, **kwargs):
                self.calls += 1
                if self.calls == 1:
                    raise RuntimeError("remaining connection slots are reserved")
                return FindResult(docs=[{"id": 3}], total_docs=1)

        store = FlakyStore()
        resolved = await resolve_category(store, "einsatz", "de", policy=no_wait_policy)

        assert resolved == {"id": 3}
        assert store.calls == 2


class TestActiveCategories:
    @pytest.mark.asyncio
    async def test_only_active_sorted_by_name(self, store, test_db, seed, no_wait_policy):
        await seed.category(test_db, "zug", "platoon", name={"de": "Zug", "en": "Platoon"})
        await seed.category(test_db, "alt", "old", name={"de": "Alt", "en": "Old"}, active=False)
        await seed.category(test_db, "einsatz", "operation", name={"de": "Einsatz", "en": "Operation"})

        categories = await get_active_categories(store, "de", policy=no_wait_policy)

        assert [category["name"] for category in categories] == ["Einsatz", "Zug"]


class TestCategoryLinks:
    def test_label_capitalized(self):
        assert category_label({"name": {"de": "einsätze", "en": "operations"}}, "en") == "Operations"

    def test_label_for_flattened_document(self):
        assert category_label({"name": "einsätze"}, "de") == "Einsätze"

    def test_label_for_bare_id(self):
        assert category_label(5, "de") == ""

    def test_path(self):
        assert category_path({"slug": {"de": "einsatz", "en": "operation"}}, "en") == "operation"

    def test_path_defaults_to_news(self):
        assert category_path(None, "de") == "news"
        assert category_path({"slug": ""}, "de") == "news"
