import secrets
from datetime import timedelta
from uuid import UUID

from ainotes.core.core import Service
from ainotes.core.modules.session.models import AuthToken, Session
from ainotes.core.modules.user.models import User
from ainotes.core.storage import Storage
from ainotes.errors import AuthenticationError
from ainotes.utils import now


class SessionService(Service):
    """Service for managing user sessions."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._collection = storage.get_collection("sessions", Session)
        self._authenticated_users: dict[AuthToken, User] = {}

    async def on_start(self) -> None:
        """Create indexes and drop sessions that expired while the server was down."""
        await self._collection.ensure_index("auth_token", unique=True)
        await self._collection.ensure_index("user_id")
        for session in await self._collection.find():
            if self._is_expired(session):
                await self._collection.delete(session.id)

    def _is_expired(self, session: Session) -> bool:
        return session.created_at + timedelta(days=self.core.config.session_ttl_days) < now()

    async def create_session(self, user_id: UUID) -> AuthToken:
        auth_token = AuthToken(secrets.token_urlsafe(32))
        await self._collection.insert(Session(user_id=user_id, auth_token=auth_token))
        return auth_token

    async def get_authenticated_user(self, auth_token: AuthToken) -> User:
        session = await self._collection.find_one(auth_token=auth_token)
        if session is None or self._is_expired(session):
            self._authenticated_users.pop(auth_token, None)
            raise AuthenticationError("Invalid or expired session")

        if auth_token in self._authenticated_users:
            return self._authenticated_users[auth_token]

        if not self.core.services.user.has_user(session.user_id):
            raise AuthenticationError("Invalid or expired session")

        user = self.core.services.user.get_user(session.user_id)
        self._authenticated_users[auth_token] = user
        return user

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        try:
            await self.get_authenticated_user(auth_token)
        except AuthenticationError:
            return False
        return True

    async def invalidate_session(self, auth_token: AuthToken) -> None:
        """Invalidate a session by removing it from storage."""
        self._authenticated_users.pop(auth_token, None)
        session = await self._collection.find_one(auth_token=auth_token)
        if session is not None:
            await self._collection.delete(session.id)

    async def invalidate_user_sessions(self, user_id: UUID) -> int:
        """Remove every session of a user (account deletion)."""
        self.forget_user(user_id)
        return await self._collection.delete_many(user_id=user_id)

    def forget_user(self, user_id: UUID) -> None:
        """Drop cached users so profile changes are visible to open sessions."""
        self._authenticated_users = {
            token: user for token, user in self._authenticated_users.items() if user.id != user_id
        }
