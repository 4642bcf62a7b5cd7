"""
Notes API — Note Request/Response Schemas
===========================================

What:  Pydantic models defining the API contract for the notes endpoints.
How:   FastAPI validates request bodies against these models, serializes
       responses, and generates OpenAPI documentation from them.

Request models check presence, type and the title column length.
Emptiness is a business rule enforced by NoteService so that direct
service callers get the same checks.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from notes_api.models.note import TITLE_MAX_LENGTH


class NoteRequest(BaseModel):
    """Body of POST /api/notes and PUT /api/notes/{id}."""
    title: str = Field(max_length=TITLE_MAX_LENGTH, description="Note title (non-empty)")
    contents: str = Field(description="Note body (non-empty)")


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every notes endpoint except DELETE.
    """
    id: int = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    contents: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class DeleteResponse(BaseModel):
    """Acknowledgment returned by DELETE /api/notes/{id}."""
    message: str = Field(default="Note deleted")
