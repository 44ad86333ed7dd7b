"""
Jotter Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the JSON contract of the notes API.
How:   The create handler validates raw request bodies against NoteCreate;
       store rows are serialized through NoteResponse.

Note JSON shape:
    {"id": 1, "content": "buy milk"}
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /notes.

    `content` must be a JSON string; numbers, null and objects are rejected
    rather than coerced. Strings SQLite cannot store (lone surrogates such as
    "\\ud800") are rejected too.
    """
    content: StrictStr = Field(description="Text of the note (unique across all notes)")

    @field_validator("content")
    @classmethod
    def validate_encodable(cls, v: str) -> str:
        """Ensures the content can be stored as UTF-8 text."""
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("content is not valid UTF-8 text")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """One stored note, as returned by every JSON-producing notes route."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Store-assigned identifier, never reused")
    content: str = Field(description="Text of the note")


class HealthResponse(BaseModel):
    """
    Health check response showing service and database status.
    Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
