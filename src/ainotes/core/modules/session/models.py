"""Session management models."""

from datetime import datetime
from typing import NewType
from uuid import UUID

from pydantic import Field

from ainotes.core.db import Record
from ainotes.utils import now

AuthToken = NewType("AuthToken", str)


class Session(Record):
    """User authentication session.

    Expires `session_ttl_days` after created_at.
    """

    user_id: UUID
    auth_token: str
    created_at: datetime = Field(default_factory=now)
