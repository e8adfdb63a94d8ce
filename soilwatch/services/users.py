"""User registration, login, profile update and account removal"""

from typing import Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.security import create_access_token, hash_password, verify_password
from ..exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    StorageError,
    UserNotFoundError,
)
from ..logging_config import get_logger
from ..models import Alert, Reading, Sensor, User

logger = get_logger(__name__)


class UserService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, name: str, email: str, password: str) -> Tuple[User, str]:
        """
        Create a user and issue an access token

        Returns:
            (user, token)

        Raises:
            DuplicateResourceError: email already registered (409)
        """
        user = User(name=name, email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateResourceError("User", email)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("user_register_failed", error=str(e))
            raise StorageError()

        logger.info("user_registered", user_id=user.id)
        return user, create_access_token(user.id)

    async def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """
        Raises:
            UserNotFoundError: no user with that email (404)
            InvalidCredentialsError: password mismatch (401)
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(email)

        if not verify_password(password, user.password_hash):
            logger.warning("login_failed", user_id=user.id)
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=user.id)
        return user, create_access_token(user.id)

    async def get(self, user_id: int) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update(self, user_id: int, name: str, email: str) -> User:
        user = await self.get(user_id)
        user.name = name
        user.email = email
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateResourceError("User", email)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("user_update_failed", user_id=user_id, error=str(e))
            raise StorageError()
        return user

    async def delete(self, user_id: int) -> None:
        """Remove the user with every sensor, reading and alert they own"""
        user = await self.get(user_id)
        owned = select(Sensor.id).where(Sensor.user_id == user_id)
        try:
            await self.db.execute(delete(Alert).where(Alert.sensor_id.in_(owned)))
            await self.db.execute(delete(Reading).where(Reading.sensor_id.in_(owned)))
            await self.db.execute(delete(Sensor).where(Sensor.user_id == user_id))
            await self.db.execute(delete(User).where(User.id == user.id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("user_delete_failed", user_id=user_id, error=str(e))
            raise StorageError()
        logger.info("user_deleted", user_id=user_id)
