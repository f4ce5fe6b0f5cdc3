from typing import Any
from uuid import UUID

import structlog

from ainotes.core.core import Service
from ainotes.core.modules.note.models import Note, NoteFormData, NoteUpdate
from ainotes.core.modules.note.validators import validate_content, validate_tags, validate_title
from ainotes.core.storage import Storage
from ainotes.errors import NotFoundError, ValidationError
from ainotes.utils import now, now_after

logger = structlog.get_logger(__name__)

WELCOME_NOTE = NoteFormData(
    title="Welcome to AI Notes",
    content=(
        "# Welcome to AI Notes\n\n"
        "This is your first note. You can edit it, delete it, or create new ones.\n\n"
        "## Features\n\n"
        "- Create, edit, and delete notes\n"
        "- Organize with tags\n"
        "- Summarize with AI\n"
        "- Save favorites\n\n"
        "Enjoy using AI Notes!"
    ),
    tags=["welcome", "tutorial"],
)
WELCOME_SUMMARY = (
    "Introduction to AI Notes application with overview of key features including "
    "note management, tagging, AI summarization and favorites."
)


class NoteService(Service):
    """Owns the note collection: create, read, update, delete, favorite.

    Every mutation is written through to storage before it returns.
    """

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._collection = storage.get_collection("notes", Note)

    async def on_start(self) -> None:
        """Create index for owner lookups."""
        await self._collection.ensure_index("owner_id")

    async def create_note(self, owner_id: str, data: NoteFormData) -> Note:
        """Create note for owner with a fresh id and identical created/updated timestamps."""
        timestamp = now()
        note = Note(
            owner_id=owner_id,
            title=validate_title(data.title),
            content=validate_content(data.content),
            tags=validate_tags(data.tags or []),
            created_at=timestamp,
            updated_at=timestamp,
        )
        await self._collection.insert(note)
        logger.debug("note_created", note_id=note.id, owner_id=owner_id)
        return note

    async def get_note(self, note_id: UUID) -> Note | None:
        """Get note by ID, or None when it does not exist."""
        return await self._collection.get(note_id)

    async def update_note(self, note_id: UUID, update: NoteUpdate) -> Note:
        """Apply a partial update and refresh updated_at.

        Title, content and tags are only changed when given (None means "keep").
        An explicitly provided blank or None summary clears the attached summary.
        """
        note = await self._require_note(note_id)

        changes: dict[str, Any] = {}
        if update.title is not None:
            changes["title"] = validate_title(update.title)
        if update.content is not None:
            changes["content"] = validate_content(update.content)
        if update.tags is not None:
            changes["tags"] = validate_tags(update.tags)
        if "summary" in update.model_fields_set:
            changes["summary"] = (update.summary or "").strip() or None

        updated = note.model_copy(update={**changes, "updated_at": now_after(note.updated_at)})
        await self._collection.replace(updated)
        logger.debug("note_updated", note_id=note_id, fields=sorted(changes))
        return updated

    async def attach_summary(self, note_id: UUID, summary: str) -> Note:
        """Save a generated summary onto the note.

        Raises:
            ValidationError: If the summary is blank
        """
        if not summary.strip():
            raise ValidationError("Summary cannot be empty")
        return await self.update_note(note_id, NoteUpdate(summary=summary))

    async def toggle_favorite(self, note_id: UUID) -> Note:
        """Flip the favorite flag."""
        note = await self._require_note(note_id)
        updated = note.model_copy(update={"is_favorite": not note.is_favorite, "updated_at": now_after(note.updated_at)})
        await self._collection.replace(updated)
        logger.debug("note_favorite_toggled", note_id=note_id, is_favorite=updated.is_favorite)
        return updated

    async def delete_note(self, note_id: UUID) -> None:
        """Delete note permanently. Deleting a missing note is a no-op."""
        deleted = await self._collection.delete(note_id)
        logger.debug("note_deleted", note_id=note_id, existed=deleted)

    async def delete_notes_by_owner(self, owner_id: str) -> int:
        """Delete all notes of an owner and return count of deleted notes."""
        return await self._collection.delete_many(owner_id=owner_id)

    async def get_notes_by_owner(self, owner_id: str) -> list[Note]:
        """All notes of an owner in insertion order."""
        return await self._collection.find(owner_id=owner_id)

    async def create_welcome_note(self, owner_id: str) -> Note:
        """Seed a new account with the favorited welcome note."""
        note = await self.create_note(owner_id, WELCOME_NOTE)
        note = await self.attach_summary(note.id, WELCOME_SUMMARY)
        return await self.toggle_favorite(note.id)

    async def _require_note(self, note_id: UUID) -> Note:
        note = await self._collection.get(note_id)
        if note is None:
            raise NotFoundError(f"Note not found: {note_id}")
        return note
