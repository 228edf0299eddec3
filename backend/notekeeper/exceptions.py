"""
NoteKeeper Backend: Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the note store, the HTTP layer and
       server startup.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn the
       request-scoped ones into JSON error responses; the CLI turns the
       startup ones into a diagnostic and a non-zero exit status.

Exception Hierarchy:
    NoteKeeperError (base)
    ├── ValidationError          → 400 Bad Request
    │   └── DuplicateNameError   → 400 Bad Request (same generic body)
    ├── NotFoundError            → 404 Not Found
    ├── PersistenceError         → 500 at runtime, fatal at startup
    └── StartupConfigError       → process exits with status 1
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description
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


class ValidationError(NoteKeeperError):
    """
    Raised when client input fails validation (missing or empty fields).

    HTTP:    400 Bad Request, generic body. The field name is kept in
             `context` for the server log only.
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


class DuplicateNameError(ValidationError):
    """
    Raised when creating a note whose name is already taken.

    A subclass of ValidationError: clients see the same 400 response for a
    duplicate name as for a missing field.
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["name"] = name
        super().__init__(
            message=f"A note named '{name}' already exists",
            field="note_name",
            context=ctx,
        )
        self.name = name


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested note does not exist.

    When:    GET/PUT/DELETE /notes/{name} for an unknown name.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(NoteKeeperError):
    """
    Raised when the persisted notes document cannot be read or written.

    When:    Malformed document at load (fatal, the server does not start),
             or an OS error while overwriting the document after a mutation.
    HTTP:    500 Internal Server Error (details logged, never returned)
    """

    def __init__(
        self,
        message: str = "The notes document could not be read or written",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StartupConfigError(NoteKeeperError):
    """
    Raised when server startup arguments are missing or invalid.

    When:    Empty host, port outside 1-65535, cache directory missing.
    Effect:  The CLI prints the message to stderr and exits with status 1.
    """

    def __init__(
        self,
        message: str = "Invalid startup configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
