"""
SQLAlchemy-backed document store

Implements the DocumentStore contract over the async SQLAlchemy models.
Every call opens its own session from the injected session factory, so
concurrent queries issued by one page render never share a session.
"""

from __future__ import annotations

import enum
import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: TC002

from brigade_site.exceptions import DocumentNotFoundError
from brigade_site.i18n.locale import alternate_locale
from brigade_site.store.base import Document, FindResult, Where
from brigade_site.store.collections import CollectionSpec, get_collection
from brigade_site.store.query import compile_sort, compile_where

logger = logging.getLogger(__name__)


def flatten_localized(value: Any, locale: str) -> Any:
    """Pick one locale out of a ``{locale: value}`` map.

    Falls back to the other locale when the requested one is empty, the same
    way the admin-facing document API fills untranslated fields.
    """
    if not isinstance(value, dict):
        return value
    chosen = value.get(locale)
    if chosen in (None, ""):
        chosen = value.get(alternate_locale(locale))
    return chosen


class SQLAlchemyDocumentStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find(
        self,
        collection: str,
        where: Where | None = None,
        *,
        limit: int = 10,
        depth: int = 0,
        sort: str | None = None,
        locale: str | None = None,
    ) -> FindResult:
        spec = get_collection(collection)
        condition = compile_where(spec, where, locale)

        async with self._session_factory() as session:
            total = await session.scalar(select(func.count()).select_from(spec.model).where(condition))
            stmt = select(spec.model).where(condition).order_by(*compile_sort(spec, sort, locale))
            if limit:
                stmt = stmt.limit(limit)
            result = await session.execute(stmt)
            rows = list(result.scalars().all())
            docs = await self._to_documents(session, spec, rows, depth, locale)

        logger.debug("find %s -> %d/%d docs (locale=%s)", collection, len(docs), total or 0, locale)
        return FindResult(docs=docs, total_docs=total or 0)

    async def find_by_id(
        self,
        collection: str,
        document_id: int | str,
        *,
        depth: int = 0,
        locale: str | None = None,
    ) -> Document:
        spec = get_collection(collection)
        try:
            key = int(document_id)
        except (TypeError, ValueError):
            raise DocumentNotFoundError(collection, document_id) from None

        async with self._session_factory() as session:
            row = await session.get(spec.model, key)
            if row is None:
                raise DocumentNotFoundError(collection, document_id)
            docs = await self._to_documents(session, spec, [row], depth, locale)
        return docs[0]

    # ── Serialization ─────────────────────────────────────────────────────────

    def _serialize(self, spec: CollectionSpec, row: Any, locale: str | None) -> Document:
        doc: Document = {}
        for key, attribute in spec.fields.items():
            value = getattr(row, attribute)
            if key in spec.localized and locale:
                value = flatten_localized(value, locale)
            elif isinstance(value, enum.Enum):
                value = value.value
            doc[key] = value
        return doc

    async def _to_documents(
        self,
        session: AsyncSession,
        spec: CollectionSpec,
        rows: list[Any],
        depth: int,
        locale: str | None,
    ) -> list[Document]:
        docs = [self._serialize(spec, row, locale) for row in rows]
        if depth <= 0:
            return docs

        # Populate relationship ids with one query per relation
        for key, target_name in spec.relations.items():
            ids = {doc[key] for doc in docs if doc.get(key) is not None}
            if not ids:
                continue
            target = get_collection(target_name)
            result = await session.execute(select(target.model).where(target.model.id.in_(ids)))
            related_docs = await self._to_documents(session, target, list(result.scalars().all()), depth - 1, locale)
            related = {related_doc["id"]: related_doc for related_doc in related_docs}
            for doc in docs:
                if doc.get(key) in related:
                    doc[key] = dict(related[doc[key]])
        return docs
