"""
Custom Exception Classes for the brigade site

This module defines the exceptions raised by the document store, the
resolution services and the page write boundary, so that routes and
exception handlers can produce consistent error responses.
"""

from typing import Any

from fastapi import status


class BrigadeError(Exception):
    """Base exception class for all site-related exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Resource Not Found Exceptions
# ============================================================================


class ResourceNotFoundError(BrigadeError):
    """Base class for resource not found errors"""

    def __init__(self, resource_type: str, resource_id: Any | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PostNotFoundError(ResourceNotFoundError):
    """Raised when no published post matches a category and slug"""

    def __init__(self, slug: Any | None = None):
        super().__init__(resource_type="Post", resource_id=slug)


class CategoryNotFoundError(ResourceNotFoundError):
    """Raised when a category path segment matches no category"""

    def __init__(self, category: Any | None = None):
        super().__init__(resource_type="Category", resource_id=category)


class PageNotFoundError(ResourceNotFoundError):
    """Raised when a page is not found"""

    def __init__(self, page: Any | None = None):
        super().__init__(resource_type="Page", resource_id=page)


class DocumentNotFoundError(ResourceNotFoundError):
    """Raised by the document store when a lookup by id finds nothing"""

    def __init__(self, collection: str, document_id: Any):
        super().__init__(resource_type=collection, resource_id=document_id)
        self.collection = collection
        self.document_id = document_id


# ============================================================================
# Validation Exceptions
# ============================================================================


class ValidationError(BrigadeError):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=error_details)


class MenuStructureError(ValidationError):
    """Raised when a page would break the two-level menu hierarchy on publish"""


class UnsupportedCollectionError(BrigadeError):
    """Raised when a query names an unknown collection or field"""

    def __init__(self, collection: str, field: str | None = None):
        message = f"Unknown collection '{collection}'"
        details: dict[str, Any] = {"collection": collection}
        if field:
            message = f"Unknown field '{field}' on collection '{collection}'"
            details["field"] = field
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


# ============================================================================
# Database & Query Exceptions
# ============================================================================


class QueryFailedError(BrigadeError):
    """Raised when a document query keeps failing after all retry attempts"""

    def __init__(self, message: str = "Document query failed", last_error: BaseException | None = None, attempts: int = 0):
        details: dict[str, Any] = {"attempts": attempts}
        if last_error is not None:
            details["last_error"] = str(last_error)
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE, details=details)
        self.last_error = last_error
        self.attempts = attempts


class InvalidQueryError(ValidationError):
    """Raised when a where clause uses an unknown operator or malformed value"""
