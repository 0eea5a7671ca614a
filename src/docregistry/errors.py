"""
DocRegistry Error Classification System.

Every failure a store operation can report is one of the exceptions below.
Operations either return their value or raise one of these; callers (and the
HTTP layer) surface them verbatim. Nothing is retried internally.

Error Categories:
-----------------
1. Validation Errors: the caller sent something unusable (HTTP 400)
   - InvalidPayloadError: missing/empty required field on create or update
   - InvalidKeywordError: empty or non-text search term
   - InvalidIdError: empty or non-text identifier

2. NotFoundError: no document with the given identifier (HTTP 404)

3. InternalError: unexpected failure of the underlying storage (HTTP 500)

Usage:
------
    from docregistry.errors import DocRegistryError, NotFoundError

    try:
        doc = store.delete_document(doc_id)
    except NotFoundError as e:
        logger.warning(f"Nothing to delete: {e}")
    except DocRegistryError as e:
        logger.error(f"Delete failed: {e.to_dict()}")
"""

from typing import Any


class DocRegistryError(Exception):
    """
    Base exception for all DocRegistry errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
        code: Stable error code reported to callers
        status_code: HTTP status used when the error crosses the API boundary
    """

    code: str = "Error"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


# =============================================================================
# Validation Errors - the request itself is unusable
# =============================================================================

class ValidationError(DocRegistryError):
    """Base class for errors caused by bad caller input."""

    code = "Invalid"
    status_code = 400


class InvalidPayloadError(ValidationError):
    """
    Raised when a required document field is missing or empty.

    The offending field name is recorded in ``details["field"]``.
    """

    code = "InvalidPayload"

    def __init__(
        self,
        message: str = "Invalid document payload",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InvalidKeywordError(ValidationError):
    """Raised when a search keyword is empty or not text."""

    code = "InvalidKeyword"

    def __init__(
        self,
        message: str = "Search keyword must be a non-empty string",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InvalidIdError(ValidationError):
    """Raised when a document identifier is empty or not text."""

    code = "InvalidId"

    def __init__(
        self,
        message: str = "Document id must be a non-empty string",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Lookup / Storage Errors
# =============================================================================

class NotFoundError(DocRegistryError):
    """Raised when no document exists under the requested identifier."""

    code = "NotFound"
    status_code = 404

    def __init__(
        self,
        message: str = "Document not found",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class InternalError(DocRegistryError):
    """
    Raised when the underlying storage fails unexpectedly.

    Also used for identifier collisions on insert, which the id scheme makes
    practically impossible and which are never retried.
    """

    code = "InternalError"
    status_code = 500

    def __init__(
        self,
        message: str = "Internal storage error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Helper Functions
# =============================================================================

def is_client_error(error: Exception) -> bool:
    """
    Check if an error was caused by the caller's input.

    Args:
        error: The exception to check

    Returns:
        True for validation and not-found errors
    """
    return isinstance(error, (ValidationError, NotFoundError))


def wrap_exception(error: Exception, context: str = "") -> DocRegistryError:
    """
    Wrap a generic exception in an InternalError.

    Registry errors are returned unchanged so that validation and lookup
    failures keep their own type.

    Args:
        error: The original exception
        context: Additional context about where the error occurred

    Returns:
        DocRegistryError instance

    Example:
        try:
            kv.mset({key: value})
        except Exception as e:
            raise wrap_exception(e, context="add_document") from e
    """
    if isinstance(error, DocRegistryError):
        return error

    message = f"{context}: {error}" if context else str(error)
    return InternalError(message=message, original_error=error)
