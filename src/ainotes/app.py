from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from ainotes.config import Config
from ainotes.core.core import Core
from ainotes.core.modules.note.models import Note, NoteFormData, NoteUpdate
from ainotes.core.modules.session.models import AuthToken
from ainotes.core.modules.summary.models import SummaryResult
from ainotes.core.modules.summary.providers import SummaryProvider
from ainotes.core.modules.user.models import UserView
from ainotes.core.storage import Storage
from ainotes.errors import AuthenticationError, NotFoundError


class App:
    """Facade for all application operations, resolves the current user before delegating to Core."""

    def __init__(
        self, config: Config, storage: Storage | None = None, summary_provider: SummaryProvider | None = None
    ) -> None:
        self._core = Core(config, storage=storage, summary_provider=summary_provider)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        """Check if authentication token is valid."""
        return await self._core.services.session.is_auth_token_valid(auth_token)

    # === Identity ===
    async def sign_up(self, email: str, password: str, name: str | None = None) -> AuthToken:
        """Register a user, seed their welcome note and open a session."""
        user = await self._core.services.user.create_user(email, password, name)
        if self._core.config.seed_welcome_note:
            await self._core.services.note.create_welcome_note(str(user.id))
        return await self._core.services.session.create_session(user.id)

    async def login(self, email: str, password: str) -> AuthToken:
        """Authenticate user and create session."""
        if not self._core.services.user.verify_password(email, password):
            raise AuthenticationError("Invalid email or password")
        user = self._core.services.user.get_user_by_email(email)
        return await self._core.services.session.create_session(user.id)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate user session."""
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        """Get current authenticated user profile."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    async def update_profile(self, auth_token: AuthToken, name: str | None, avatar_url: str | None) -> UserView:
        """Update display name and avatar of the current user."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        user = await self._core.services.user.update_profile(current_user.id, name, avatar_url)
        self._core.services.session.forget_user(user.id)
        return UserView.from_domain(user)

    async def change_password(self, auth_token: AuthToken, old_password: str, new_password: str) -> None:
        """Change password for current user."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.user.change_password(current_user.id, old_password, new_password)
        self._core.services.session.forget_user(current_user.id)

    async def delete_account(self, auth_token: AuthToken) -> None:
        """Delete the current user together with their notes and sessions."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.note.delete_notes_by_owner(str(current_user.id))
        await self._core.services.session.invalidate_user_sessions(current_user.id)
        await self._core.services.user.delete_user(current_user.id)

    # === Notes ===
    async def get_notes(self, auth_token: AuthToken, query: str | None = None) -> list[Note]:
        """List notes of the current user, or search them when a query is given."""
        owner_id = await self._resolve_owner(auth_token)
        if query is None:
            return await self._core.services.query.list_by_owner(owner_id)
        return await self._core.services.query.search(owner_id, query)

    async def get_favorite_notes(self, auth_token: AuthToken) -> list[Note]:
        """List favorited notes of the current user."""
        owner_id = await self._resolve_owner(auth_token)
        return await self._core.services.query.list_favorites(owner_id)

    async def get_recent_notes(self, auth_token: AuthToken, limit: int = 6) -> list[Note]:
        """List most recently updated notes of the current user."""
        owner_id = await self._resolve_owner(auth_token)
        return await self._core.services.query.list_recent(owner_id, limit)

    async def get_tags(self, auth_token: AuthToken) -> list[str]:
        """List distinct tags of the current user."""
        owner_id = await self._resolve_owner(auth_token)
        return await self._core.services.query.list_tags(owner_id)

    async def get_note(self, auth_token: AuthToken, note_id: UUID) -> Note:
        """Get a note of the current user."""
        _, note = await self._core.services.access.ensure_note_owner(auth_token, note_id)
        return note

    async def create_note(self, auth_token: AuthToken, data: NoteFormData) -> Note:
        """Create a note owned by the current user."""
        owner_id = await self._resolve_owner(auth_token)
        return await self._core.services.note.create_note(owner_id, data)

    async def update_note(self, auth_token: AuthToken, note_id: UUID, update: NoteUpdate) -> Note:
        """Partially update a note of the current user."""
        await self._core.services.access.ensure_note_owner(auth_token, note_id)
        return await self._core.services.note.update_note(note_id, update)

    async def delete_note(self, auth_token: AuthToken, note_id: UUID) -> None:
        """Delete a note of the current user. Missing or foreign notes are left alone."""
        try:
            await self._core.services.access.ensure_note_owner(auth_token, note_id)
        except NotFoundError:
            return
        await self._core.services.note.delete_note(note_id)

    async def toggle_favorite(self, auth_token: AuthToken, note_id: UUID) -> Note:
        """Flip the favorite flag of a note of the current user."""
        await self._core.services.access.ensure_note_owner(auth_token, note_id)
        return await self._core.services.note.toggle_favorite(note_id)

    # === Summaries ===
    async def summarize_note(self, auth_token: AuthToken, note_id: UUID) -> SummaryResult:
        """Generate a summary of a note's content without saving it."""
        _, note = await self._core.services.access.ensure_note_owner(auth_token, note_id)
        return await self._core.services.summary.summarize(note.content)

    async def attach_summary(self, auth_token: AuthToken, note_id: UUID, summary: str) -> Note:
        """Save a summary onto a note of the current user."""
        await self._core.services.access.ensure_note_owner(auth_token, note_id)
        return await self._core.services.note.attach_summary(note_id, summary)

    async def summarize_text(self, auth_token: AuthToken, text: str) -> SummaryResult:
        """Summarize arbitrary text, e.g. a draft that is not saved yet."""
        await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.summary.summarize(text)

    # === Private resolver methods ===
    async def _resolve_owner(self, auth_token: AuthToken) -> str:
        """Resolve auth token to the owner id used on notes."""
        user = await self._core.services.access.ensure_authenticated(auth_token)
        return str(user.id)
