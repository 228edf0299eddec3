"""
NoteKeeper Backend: Pydantic Schemas
====================================

What:  Pydantic models for the note record, the persisted document and the
       API responses.
How:   `Note` doubles as the persisted element and the JSON note record
       returned by the API. `NoteDocument` validates a whole persisted
       document in one call. FastAPI builds the OpenAPI docs from the rest.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, TypeAdapter


# ══════════════════════════════════════════════════════════════════════════
# Domain / Persisted Models
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    A named text record.

    `name` is the unique identifier and never changes after creation;
    `text` is replaced by updates. The persisted document is a JSON array
    of exactly these objects.
    """
    name: str = Field(description="Unique note name")
    text: str = Field(description="Note body")

    model_config = {"frozen": True, "extra": "ignore"}


# Validates the whole persisted document (a JSON array of Note objects)
NoteDocument = TypeAdapter(List[Note])


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class WriteResponse(BaseModel):
    """
    Confirmation returned by POST /write with HTTP 201 Created.
    """
    message: str = Field(
        default="Note created",
        description="Human-readable success message",
    )
    note: Note = Field(description="The note that was stored")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "note 'groceries' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response for the notes service."""
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently held in memory")
    storage: str = Field(description="Notes document location: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
