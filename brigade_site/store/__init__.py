from .base import Document, DocumentStore, FindResult, Where
from .sqlalchemy_store import SQLAlchemyDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "FindResult",
    "SQLAlchemyDocumentStore",
    "Where",
]
