"""User router - API endpoints for user registration."""
from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_user_service
from app.errors import ServiceError
from app.models.user import UserCreate, UserRegisterResponse
from app.services.user_service import UserService


router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/register",
    response_model=UserRegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """
    Register a new user.

    Args:
        user: User registration data
        service: User service

    Returns:
        Registration outcome

    Raises:
        HTTPException: If a registration rule fails (400) or the email is
            already registered (409)
    """
    try:
        return await service.register_user(user)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
