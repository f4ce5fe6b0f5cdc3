import structlog

from ainotes.core.core import Service
from ainotes.core.modules.note.models import Note
from ainotes.core.modules.query.utils import distinct_tags, note_matches

logger = structlog.get_logger(__name__)


class QueryService(Service):
    """Read-only, owner-scoped views over the note collection.

    Nothing is cached: each call reads the current state of the store.
    """

    async def list_by_owner(self, owner_id: str) -> list[Note]:
        """All notes of the owner, in insertion order."""
        return await self.core.services.note.get_notes_by_owner(owner_id)

    async def list_favorites(self, owner_id: str) -> list[Note]:
        """Favorited notes of the owner."""
        return [note for note in await self.list_by_owner(owner_id) if note.is_favorite]

    async def search(self, owner_id: str, query: str) -> list[Note]:
        """Notes of the owner whose title, content or tags contain the query."""
        notes = [note for note in await self.list_by_owner(owner_id) if note_matches(note, query)]
        logger.debug("search_notes", owner_id=owner_id, query=query, returned=len(notes))
        return notes

    async def list_recent(self, owner_id: str, limit: int = 6) -> list[Note]:
        """Most recently updated notes first."""
        notes = await self.list_by_owner(owner_id)
        return sorted(notes, key=lambda note: note.updated_at, reverse=True)[:limit]

    async def list_tags(self, owner_id: str) -> list[str]:
        """Distinct tags used by the owner."""
        return distinct_tags(await self.list_by_owner(owner_id))
