"""
Notes API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception carries a client-safe message and an optional context
       dict. Handlers registered in main.py turn them into plain-text
       responses with the matching status code; the context is logged only.
Who:   Raised by the note repository and the store connector.

Exception Hierarchy:
    NotesApiError (base)             → 500 Internal Server Error
    ├── ValidationError              → 400 Bad Request
    │   └── InvalidIdentifierError   → 400 Bad Request (malformed note id)
    ├── NotFoundError                → 404 Not Found
    ├── DatabaseError                → 500 Internal Server Error
    └── StoreUnavailableError        → 503 Service Unavailable
"""

from typing import Any, Dict, Optional

# Body of every 500 caused by an exception outside this hierarchy
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class NotesApiError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = UNEXPECTED_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesApiError):
    """Raised when client input cannot be used as given (HTTP 400)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(ValidationError):
    """
    Raised when a path id cannot be parsed into a MongoDB ObjectId.

    A valid id is a 24-character hex string. Anything else is rejected
    before the store is contacted.
    """

    def __init__(self, raw_id: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message="Invalid note id.", field="id", context=ctx)
        self.raw_id = raw_id


class NotFoundError(NotesApiError):
    """
    Raised when an update addresses a note that does not exist.

    Only the update operation raises this; a delete that removes nothing
    reports `{"ok": false}` instead.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found.", context=ctx)


class DatabaseError(NotesApiError):
    """
    Raised when a store operation fails (write conflict, rejected document,
    lost connection mid-call).

    Security Note:
        The message returned to the client is always the generic,
        per-operation text. The driver's error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(NotesApiError):
    """
    Raised when a request needs the collection handle but the store
    connector never connected (startup failure, or the request arrived
    before startup finished).
    """

    status_code = 503

    def __init__(
        self,
        message: str = "The note store is unavailable.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
