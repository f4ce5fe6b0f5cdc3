from datetime import datetime

from pydantic import BaseModel, Field

from ainotes.core.db import Record
from ainotes.utils import now


class Note(Record):
    """Titled, tagged text note owned by a single user."""

    owner_id: str  # Opaque user id, never changes after creation
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)  # Order preserved, not deduplicated
    is_favorite: bool = False
    summary: str | None = None  # Set only when a generated summary is attached
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class NoteFormData(BaseModel):
    """Fields supplied when creating a note."""

    title: str = Field(..., description="Note title (required, non-empty)")
    content: str = Field(..., description="Note body (required, non-empty)")
    tags: list[str] | None = Field(None, description="Optional ordered list of tags")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Reading list",
                    "content": "Finish the chapter on consensus. Take notes on Raft.",
                    "tags": ["books", "distributed-systems"],
                }
            ]
        }
    }


class NoteUpdate(BaseModel):
    """Partial note update. Only fields that are set are applied."""

    title: str | None = Field(None, description="New title")
    content: str | None = Field(None, description="New content")
    tags: list[str] | None = Field(None, description="Replacement tag list")
    summary: str | None = Field(None, description="Summary to attach")
