"""
Jotter Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the failures a note request can hit.
How:   Each exception carries a message and an optional context dict.
       The store raises them; the route handlers catch them and answer with
       a fixed plain-text 500 for the route.
Who:   Raised by NoteStore; caught by the handlers in routes/notes.py.

Exception Hierarchy:
    JotterError (base)
    ├── ValidationError              malformed body or non-integer id
    └── StorageError                 engine-level fault (I/O, SQL, driver)
        └── DuplicateContentError    UNIQUE(content) violated on insert

    Every one of them surfaces as HTTP 500. A missing note is not an error:
    lookups return an empty list and deletes report success.
"""

from typing import Any, Dict, Optional


class JotterError(Exception):
    """
    Base exception for all Jotter application errors.

    Attributes:
        message:  Short description of what failed
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JotterError):
    """
    Raised when client input cannot be turned into a store operation.

    When:    Body is not JSON, `content` missing or not a string, id not an integer.
    HTTP:    500 with the route's fixed message.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class StorageError(JotterError):
    """
    Raised when a database operation fails.

    When:    Connection lost, malformed query parameters, disk I/O errors.
    HTTP:    500 with the route's fixed message.

    The original SQLAlchemy error is kept in `context` for the operational log
    and is never written to a response body.
    """

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DuplicateContentError(StorageError):
    """
    Raised when inserting a note whose content already exists.

    The UNIQUE constraint on notes.content is the only thing enforcing this;
    handlers never pre-check.
    """

    def __init__(
        self,
        content: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if content is not None:
            ctx["content_length"] = len(content)
        super().__init__(message="A note with this content already exists", context=ctx)
