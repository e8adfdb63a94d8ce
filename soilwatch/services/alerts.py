"""Manual alert management"""

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StorageError
from ..logging_config import get_logger
from ..models import Alert
from .ownership import OwnershipGuard

logger = get_logger(__name__)


class AlertService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = OwnershipGuard(db)

    async def create(self, user_id: int, sensor_id: int, message: str, level: str) -> Alert:
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        alert = Alert(sensor_id=sensor.id, message=message, level=level)
        self.db.add(alert)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("alert_create_failed", sensor_id=sensor_id, error=str(e))
            raise StorageError()
        logger.info("alert_created", alert_id=alert.id, sensor_id=sensor_id, level=level)
        return alert

    async def list(self, user_id: int, sensor_id: int) -> List[Alert]:
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        result = await self.db.execute(
            select(Alert).where(Alert.sensor_id == sensor.id).order_by(Alert.created_at, Alert.id)
        )
        return list(result.scalars().all())

    async def get(self, user_id: int, sensor_id: int, alert_id: int) -> Alert:
        await self.guard.resolve_owned_sensor(user_id, sensor_id)
        return await self.guard.resolve_owned_alert(user_id, alert_id, sensor_id=sensor_id)

    async def update(self, user_id: int, alert_id: int, message: str, level: str) -> Alert:
        alert = await self.guard.resolve_owned_alert(user_id, alert_id)
        alert.message = message
        alert.level = level
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("alert_update_failed", alert_id=alert_id, error=str(e))
            raise StorageError()
        return alert

    async def delete(self, user_id: int, alert_id: int) -> None:
        alert = await self.guard.resolve_owned_alert(user_id, alert_id)
        try:
            await self.db.execute(delete(Alert).where(Alert.id == alert.id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("alert_delete_failed", alert_id=alert_id, error=str(e))
            raise StorageError()
        logger.info("alert_deleted", alert_id=alert_id)
