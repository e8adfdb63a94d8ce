"""Sensor lifecycle: create, provision, claim, update, delete"""

from datetime import datetime
from typing import List

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.security import generate_webhook_token
from ..exceptions import SensorClaimConflictError, StorageError
from ..logging_config import get_logger
from ..metrics import track_sensor_claim
from ..models import Alert, Reading, Sensor
from .ownership import OwnershipGuard

logger = get_logger(__name__)


class SensorService:
    """Sensor operations on behalf of a user; every lookup goes through the guard"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.guard = OwnershipGuard(db)

    async def create(self, user_id: int, sensor_name: str, location: str) -> Sensor:
        """Register a sensor owned by the caller, with a fresh webhook token"""
        sensor = await self._insert(user_id, sensor_name, location)
        logger.info("sensor_created", sensor_id=sensor.id, user_id=user_id)
        return sensor

    async def provision(self, sensor_name: str, location: str) -> Sensor:
        """
        Register an unowned sensor

        Operator path for devices that start posting through the webhook
        before anybody claims them.
        """
        sensor = await self._insert(None, sensor_name, location)
        logger.info("sensor_provisioned", sensor_id=sensor.id)
        return sensor

    async def _insert(self, user_id, sensor_name: str, location: str) -> Sensor:
        sensor = Sensor(
            user_id=user_id,
            sensor_name=sensor_name,
            location=location,
            installed_at=datetime.utcnow(),
            webhook_token=generate_webhook_token(),
        )
        self.db.add(sensor)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("sensor_create_failed", error=str(e))
            raise StorageError()
        return sensor

    async def list(self, user_id: int) -> List[Sensor]:
        return await self.guard.list_owned_sensors(user_id)

    async def get(self, user_id: int, sensor_id: int) -> Sensor:
        return await self.guard.resolve_owned_sensor(user_id, sensor_id)

    async def update(self, user_id: int, sensor_id: int, sensor_name: str, location: str) -> Sensor:
        """Rename / relocate; the webhook token and owner are left alone"""
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        sensor.sensor_name = sensor_name
        sensor.location = location
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("sensor_update_failed", sensor_id=sensor_id, error=str(e))
            raise StorageError()
        return sensor

    async def delete(self, user_id: int, sensor_id: int) -> None:
        """Delete the sensor along with its readings and alerts"""
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        try:
            await self.db.execute(delete(Alert).where(Alert.sensor_id == sensor.id))
            await self.db.execute(delete(Reading).where(Reading.sensor_id == sensor.id))
            await self.db.execute(delete(Sensor).where(Sensor.id == sensor.id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("sensor_delete_failed", sensor_id=sensor_id, error=str(e))
            raise StorageError()
        logger.info("sensor_deleted", sensor_id=sensor_id, user_id=user_id)

    async def claim(self, user_id: int, sensor_id: int) -> Sensor:
        """
        Bind an unowned sensor to the caller

        Compare-and-set in a single statement: the row is only updated while
        user_id is still NULL, and the affected row count decides the outcome.
        Of two concurrent claims exactly one sees a row count of 1.

        Raises:
            SensorClaimConflictError: sensor missing or already owned (404)
        """
        stmt = (
            update(Sensor)
            .where(Sensor.id == sensor_id, Sensor.user_id.is_(None))
            .values(user_id=user_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.db.execute(stmt)
            if result.rowcount != 1:
                await self.db.rollback()
                track_sensor_claim("conflict")
                logger.info("sensor_claim_conflict", sensor_id=sensor_id, user_id=user_id)
                raise SensorClaimConflictError(sensor_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            track_sensor_claim("error")
            logger.error("sensor_claim_failed", sensor_id=sensor_id, error=str(e))
            raise StorageError()

        track_sensor_claim("claimed")
        logger.info("sensor_claimed", sensor_id=sensor_id, user_id=user_id)
        return await self.db.get(Sensor, sensor_id, populate_existing=True)
