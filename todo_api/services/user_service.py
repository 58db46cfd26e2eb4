"""Credential store: account creation, lookup and password verification."""
from typing import Optional
import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from todo_api.core.security import BCRYPT_MAX_BYTES, hash_password, verify_password
from todo_api.errors import DuplicateEmailError, ValidationError
from todo_api.models.user import User
from todo_api.schemas.user import UserProfile

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
# Matches the VARCHAR(255) email and name columns
MAX_FIELD_LENGTH = 255


class UserService:
    """Service class for user accounts. Never hands out password hashes."""

    def __init__(self, session: Session, rounds: int = 10):
        self.session = session
        self.rounds = rounds
        self._dummy_hash: Optional[str] = None

    def register(self, email: Optional[str], raw_password: Optional[str], name: Optional[str]) -> UserProfile:
        """
        Create an account with a hashed password.

        Raises:
            ValidationError: Missing fields, malformed email or short password
            DuplicateEmailError: The email is already registered
        """
        if not email or not raw_password or not name or not name.strip():
            raise ValidationError("Email, password, and name are required")
        if len(email) > MAX_FIELD_LENGTH:
            raise ValidationError(f"Email must be at most {MAX_FIELD_LENGTH} characters")
        if not EMAIL_PATTERN.fullmatch(email):
            raise ValidationError("Invalid email format")
        if len(name.strip()) > MAX_FIELD_LENGTH:
            raise ValidationError(f"Name must be at most {MAX_FIELD_LENGTH} characters")
        if len(raw_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(raw_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        user = User(
            email=email,
            password_hash=hash_password(raw_password, self.rounds),
            name=name.strip(),
        )
        self.session.add(user)

        # No pre-check: the unique index decides, so concurrent signups cannot both win
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Signup rejected: email already registered")
            raise DuplicateEmailError()

        self.session.refresh(user)
        logger.info("Registered user %s", user.id)
        return UserProfile.model_validate(user)

    def verify_credentials(self, email: Optional[str], raw_password: Optional[str]) -> Optional[UserProfile]:
        """
        Check an email/password pair.

        Returns None for both an unknown email and a wrong password so
        callers cannot tell the two apart.
        """
        if not email or not raw_password:
            return None

        user = self._get_by_email(email)
        if user is None:
            # Spend the same hashing effort as a real comparison
            verify_password(raw_password, self._get_dummy_hash())
            return None

        if not verify_password(raw_password, user.password_hash):
            return None
        return UserProfile.model_validate(user)

    def find_by_id(self, user_id: int) -> Optional[UserProfile]:
        user = self.session.get(User, user_id)
        return UserProfile.model_validate(user) if user else None

    def find_by_email(self, email: str) -> Optional[UserProfile]:
        user = self._get_by_email(email)
        return UserProfile.model_validate(user) if user else None

    def _get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("not-a-real-password", self.rounds)
        return self._dummy_hash
