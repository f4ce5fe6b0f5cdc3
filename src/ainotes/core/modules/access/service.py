from uuid import UUID

from ainotes.core.core import Service
from ainotes.core.modules.note.models import Note
from ainotes.core.modules.session.models import AuthToken
from ainotes.core.modules.user.models import User
from ainotes.errors import NotFoundError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Ensure the user is authenticated."""
        return await self.core.services.session.get_authenticated_user(auth_token)

    async def ensure_note_owner(self, auth_token: AuthToken, note_id: UUID) -> tuple[User, Note]:
        """Return the current user and their note.

        Notes of other users are reported as not found, never as forbidden.
        """
        user = await self.ensure_authenticated(auth_token)
        note = await self.core.services.note.get_note(note_id)
        if note is None or note.owner_id != str(user.id):
            raise NotFoundError(f"Note not found: {note_id}")
        return user, note
