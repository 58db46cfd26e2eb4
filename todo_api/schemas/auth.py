"""Authentication schemas."""
from typing import Optional

from pydantic import BaseModel

from todo_api.schemas.user import UserProfile


class SignUpRequest(BaseModel):
    """Sign up request body. Field checks happen in UserService.register."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request body."""
    email: Optional[str] = None
    password: Optional[str] = None


class SignUpResponse(BaseModel):
    message: str
    user: UserProfile


class LoginResponse(BaseModel):
    """Response containing the bearer token after login."""
    message: str
    token: str
    user: UserProfile
