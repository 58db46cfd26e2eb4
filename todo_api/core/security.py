"""Password hashing and bearer token handling."""
from datetime import datetime, timezone
from typing import Optional
import logging

import bcrypt
import jwt
from pydantic import BaseModel

from todo_api.core.config import Settings
from todo_api.errors import InvalidTokenError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class TokenClaims(BaseModel):
    """Identity carried by a verified bearer token."""
    user_id: int
    email: Optional[str] = None


def hash_password(raw_password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(raw_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Oversized input or a corrupt stored hash can never match
        return False


def issue_token(user_id: int, email: str, settings: Settings, now: Optional[datetime] = None) -> str:
    """
    Mint a signed, time-limited bearer token.

    The payload is signed, not encrypted, so it only carries the user id
    and email.
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + settings.token_lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> TokenClaims:
    """
    Validate signature and expiry and extract the caller's identity.

    Raises:
        InvalidTokenError: For any malformed, unsigned, tampered or expired token
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected bearer token: expired")
        raise InvalidTokenError("Invalid or expired token")
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected bearer token: %s", type(e).__name__)
        raise InvalidTokenError("Invalid or expired token")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        logger.warning("Rejected bearer token: non-numeric subject")
        raise InvalidTokenError("Invalid or expired token")

    return TokenClaims(user_id=user_id, email=payload.get("email"))
