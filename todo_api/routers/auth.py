"""Authentication router: signup and login."""
import logging

from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from todo_api.core.security import issue_token
from todo_api.db.config import get_session
from todo_api.errors import AuthenticationError, ValidationError
from todo_api.schemas.auth import LoginRequest, LoginResponse, SignUpRequest, SignUpResponse
from todo_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def get_user_service(request: Request, session: Session = Depends(get_session)) -> UserService:
    """Dependency for getting UserService instance."""
    return UserService(session, rounds=request.app.state.settings.bcrypt_rounds)


@router.post("/signup", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
def signup(body: SignUpRequest, service: UserService = Depends(get_user_service)):
    """Create an account. The response never includes the password hash."""
    user = service.register(body.email, body.password, body.name)
    return SignUpResponse(message="User created successfully", user=user)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    """Exchange email and password for a bearer token."""
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user = service.verify_credentials(body.email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise AuthenticationError("Invalid email or password")

    token = issue_token(user.id, user.email, request.app.state.settings)
    return LoginResponse(message="Login successful", token=token, user=user)
