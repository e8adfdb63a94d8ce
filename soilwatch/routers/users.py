"""Account management for the authenticated user"""

from fastapi import APIRouter, Depends

from ..auth import get_current_user_id
from ..dependencies import get_user_service
from ..schemas import MessageResponse, UserUpdate
from ..services import UserService

router = APIRouter(tags=["users"])


@router.put("/user", response_model=MessageResponse)
async def update_user(
    body: UserUpdate,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    await service.update(user_id, body.name, body.email)
    return MessageResponse(message="User updated")


@router.delete("/user", response_model=MessageResponse)
async def delete_user(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Delete the account together with its sensors, readings and alerts"""
    await service.delete(user_id)
    return MessageResponse(message="User deleted")
