from fastapi import Request

from brigade_site.database import AsyncSessionLocal
from brigade_site.middleware.language import detect_locale
from brigade_site.services.retry import RetryPolicy
from brigade_site.store import DocumentStore, SQLAlchemyDocumentStore

_store = SQLAlchemyDocumentStore(AsyncSessionLocal)


def get_store() -> DocumentStore:
    return _store


def get_retry_policy() -> RetryPolicy:
    return RetryPolicy.from_settings()


def get_locale(request: Request) -> str:
    """Locale chosen by LanguageMiddleware, detected on the spot if it did not run."""
    locale = getattr(request.state, "locale", None)
    return locale or detect_locale(request)
