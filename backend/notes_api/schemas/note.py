"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models describing the API contract.
How:   FastAPI uses them to parse request bodies and to generate the
       OpenAPI document served at /api-docs.

Notes are schema-less documents. The models type the two well-known
fields (`title`, `content`) as optional strings and keep every other
field through `extra="allow"`, so whatever the client sends is what the
store receives.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class Note(BaseModel):
    """
    What:  A note document as submitted by the client.
    Who:   Request body of POST /notes and PUT /notes/{id}.

    No field is required. Unknown fields are preserved verbatim; use
    `to_document()` to get exactly the fields the client sent.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"title": "Groceries", "content": "Milk, eggs"}},
    )

    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")

    def to_document(self) -> dict:
        """Fields the client actually sent, extras included."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StoredNote(Note):
    """
    What:  A note as returned by GET /notes.
    How:   The store-assigned ObjectId is rendered as its hex string under
           `_id`; every other stored field is returned as-is.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="_id", description="Store-assigned identifier (24 hex chars)")


class DeleteResult(BaseModel):
    """Outcome of DELETE /notes/{id}: whether exactly one note was removed."""

    ok: bool = Field(description="True if a note was deleted, false if none matched")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
