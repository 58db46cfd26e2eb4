"""Python client for the Todo API."""

from .api import ApiError, TodoClient
from .session import AuthSession

__all__ = ["ApiError", "AuthSession", "TodoClient"]
