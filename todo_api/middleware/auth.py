"""Bearer token authentication dependency for FastAPI."""
from fastapi import Request

from todo_api.core.security import TokenClaims, verify_token
from todo_api.errors import AuthenticationError


async def get_current_user(request: Request) -> TokenClaims:
    """
    Validate the JWT from the Authorization header and extract the caller.

    Runs before any protected handler, so a rejected request never reaches
    the service layer.

    Args:
        request: FastAPI request object to extract Authorization header

    Returns:
        TokenClaims with the user id and email from the token

    Raises:
        AuthenticationError: If no bearer token was sent (401)
        InvalidTokenError: If the token is invalid or expired (403)
    """
    auth_header = request.headers.get("authorization")
    if not auth_header:
        raise AuthenticationError("Access token required")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Access token required")

    return verify_token(token, request.app.state.settings)
