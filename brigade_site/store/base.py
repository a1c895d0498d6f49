"""
Document store contract

The resolution services only ever talk to the document store through
this interface, so they can run against the SQLAlchemy implementation in
production and against any other backend that honours the same shape.

Documents are plain dicts keyed by camelCase field names. When a
``locale`` is given, localized fields come back as that locale's string;
without one they come back as ``{"de": ..., "en": ...}`` maps.
Relationship fields are bare ids at ``depth=0`` and nested documents at
``depth >= 1``.

Where clauses are nested dicts::

    {"and": [
        {"slug": {"equals": "fest-2024"}},
        {"category": {"equals": 5}},
        {"status": {"equals": "published"}},
    ]}

Supported operators: equals, not_equals, less_than, greater_than,
exists, in. Localized fields can be pinned to one locale with a dotted
path such as ``"slug.en"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

Document = dict[str, Any]
Where = dict[str, Any]


@dataclass
class FindResult:
    docs: list[Document] = field(default_factory=list)
    total_docs: int = 0

    @property
    def first(self) -> Document | None:
        return self.docs[0] if self.docs else None


class DocumentStore(Protocol):
    async def find(
        self,
        collection: str,
        where: Where | None = None,
        *,
        limit: int = 10,
        depth: int = 0,
        sort: str | None = None,
        locale: str | None = None,
    ) -> FindResult: ...

    async def find_by_id(
        self,
        collection: str,
        document_id: int | str,
        *,
        depth: int = 0,
        locale: str | None = None,
    ) -> Document:
        """Raises DocumentNotFoundError when no document has ``document_id``."""
        ...
