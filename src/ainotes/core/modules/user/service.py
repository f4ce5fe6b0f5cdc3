from uuid import UUID

import bcrypt
import structlog

from ainotes.core.core import Service
from ainotes.core.modules.user.models import User
from ainotes.core.modules.user.validators import fits_bcrypt, normalize_email, validate_password
from ainotes.core.storage import Storage
from ainotes.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages users with in-memory cache."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._collection = storage.get_collection("users", User)
        self._users: dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def get_user_by_email(self, email: str) -> User:
        """Get user by email from cache."""
        email = email.strip().lower()
        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            raise NotFoundError(f"User '{email}' not found")
        return user

    def has_user(self, user_id: UUID) -> bool:
        """Check if user exists by ID."""
        return user_id in self._users

    def has_email(self, email: str) -> bool:
        """Check if email is registered."""
        email = email.strip().lower()
        return any(user.email == email for user in self._users.values())

    async def create_user(self, email: str, password: str, name: str | None = None) -> User:
        """Create user with hashed password. Name defaults to the local part of the email."""
        email = normalize_email(email)
        if self.has_email(email):
            raise ValidationError(f"User '{email}' already exists")

        validate_password(password)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        user = User(email=email, name=(name or "").strip() or email.split("@")[0], password_hash=password_hash)
        await self._collection.insert(user)
        logger.debug("user_created", user_id=user.id)
        return await self.update_user_cache(user.id)

    def verify_password(self, email: str, password: str) -> bool:
        """Verify password against stored hash."""
        email = email.strip().lower()
        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            return False
        return self._password_matches(user, password)

    async def change_password(self, user_id: UUID, old_password: str, new_password: str) -> None:
        """Change user password after verifying current password."""
        user = self.get_user(user_id)
        if not self._password_matches(user, old_password):
            raise ValidationError("Invalid current password")

        validate_password(new_password)
        password_hash = bcrypt.hashpw(new_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
        await self._collection.replace(user.model_copy(update={"password_hash": password_hash}))
        await self.update_user_cache(user_id)

    async def update_profile(self, user_id: UUID, name: str | None = None, avatar_url: str | None = None) -> User:
        """Update display name and avatar. None leaves a value unchanged."""
        user = self.get_user(user_id)
        changes: dict[str, str | None] = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty")
            changes["name"] = name.strip()
        if avatar_url is not None:
            changes["avatar_url"] = avatar_url.strip() or None
        await self._collection.replace(user.model_copy(update=changes))
        return await self.update_user_cache(user_id)

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user from the system."""
        if not self.has_user(user_id):
            raise NotFoundError(f"User '{user_id}' not found")

        await self._collection.delete(user_id)
        del self._users[user_id]
        logger.debug("user_deleted", user_id=user_id)

    async def update_all_users_cache(self) -> None:
        """Reload all users cache from storage."""
        users = await self._collection.find()
        self._users = {user.id: user for user in users}

    async def update_user_cache(self, user_id: UUID) -> User:
        """Reload a specific user cache from storage."""
        user = await self._collection.get(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        self._users[user_id] = user
        return user

    async def on_start(self) -> None:
        """Initialize indexes and cache."""
        await self._collection.ensure_index("email", unique=True)
        await self.update_all_users_cache()
        logger.debug("user_service_started", user_count=len(self._users))

    @staticmethod
    def _password_matches(user: User, password: str) -> bool:
        # bcrypt raises on input over MAX_PASSWORD_BYTES
        if not fits_bcrypt(password):
            return False
        return bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8"))
