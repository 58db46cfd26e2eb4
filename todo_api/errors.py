"""
Domain error taxonomy.

Services raise these; only the API boundary maps them to HTTP responses
(see todo_api.middleware.errors).
"""


class AppError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400


class AuthenticationError(AppError):
    """Missing credentials or bad email/password."""
    status_code = 401


class InvalidTokenError(AuthenticationError):
    """Bearer token that is malformed, badly signed or expired."""
    status_code = 403


class NotFoundError(AppError):
    """Resource absent, or not owned by the caller."""
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)


class InternalError(AppError):
    status_code = 500
