"""User profile router."""
from fastapi import APIRouter, Depends

from todo_api.core.security import TokenClaims
from todo_api.errors import NotFoundError
from todo_api.middleware.auth import get_current_user
from todo_api.routers.auth import get_user_service
from todo_api.schemas.user import UserResponse
from todo_api.services.user_service import UserService

router = APIRouter(tags=["Users"])


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: TokenClaims = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Fetch the caller's profile fresh from the database."""
    user = service.find_by_id(current_user.user_id)
    if user is None:
        # Token still valid but the account is gone
        raise NotFoundError("User not found")
    return UserResponse(user=user)
