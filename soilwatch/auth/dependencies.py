"""Authentication dependencies for FastAPI"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from .security import decode_access_token
from ..core.database import get_db
from ..exceptions import AuthenticationError
from ..models import User

security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> int:
    """
    Resolve the caller's user id from the Bearer token

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or expired,
            or its user has since been deleted
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.user_id

    # Tokens outlive their user; DELETE /user does not revoke them
    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.scalar_one_or_none() is None:
        raise AuthenticationError("Invalid or expired token")

    request.state.user_id = user_id
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id
