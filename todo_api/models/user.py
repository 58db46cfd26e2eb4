"""User model for SQLModel."""
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Account record. The password hash never leaves the credential store."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    # Uniqueness is enforced by the database, not only by the service
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    name: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utcnow)
