"""Registration and login"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_user_service
from ..schemas import TokenResponse, UserLogin, UserRegister
from ..services import UserService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: UserRegister,
    service: UserService = Depends(get_user_service)
):
    """Create an account and return an access token for it"""
    user, token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token, name=user.name, email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: UserLogin,
    service: UserService = Depends(get_user_service)
):
    """
    Exchange email and password for an access token

    Unknown email answers 404, wrong password 401.
    """
    user, token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token, name=user.name, email=user.email)
