from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ainotes.core.db import Record
from ainotes.utils import now


class User(Record):
    """User domain model with credentials."""

    email: str  # Stored lower-case, unique
    name: str | None = None
    avatar_url: str | None = None
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str | None = Field(None, description="Display name")
    avatar_url: str | None = Field(None, description="Avatar image URL")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, name=user.name, avatar_url=user.avatar_url)
