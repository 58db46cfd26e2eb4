"""User schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserProfile(BaseModel):
    """Public view of a user. Deliberately has no password field."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    email: str
    name: str
    created_at: datetime


class UserResponse(BaseModel):
    user: UserProfile
