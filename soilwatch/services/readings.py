"""Reading queries and edits under an owned sensor"""

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..evaluator import level_labels
from ..exceptions import StorageError
from ..logging_config import get_logger
from ..models import Reading
from ..schemas.reading import ReadingUpdate
from ..thresholds import ThresholdTable
from .ownership import OwnershipGuard

logger = get_logger(__name__)


class ReadingService:

    def __init__(self, db: AsyncSession, thresholds: ThresholdTable):
        self.db = db
        self.thresholds = thresholds
        self.guard = OwnershipGuard(db)

    async def list(self, user_id: int, sensor_id: int) -> List[Reading]:
        """Readings of an owned sensor, oldest first"""
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        result = await self.db.execute(
            select(Reading)
            .where(Reading.sensor_id == sensor.id)
            .order_by(Reading.captured_at, Reading.id)
        )
        return list(result.scalars().all())

    async def get(self, user_id: int, sensor_id: int, reading_id: int) -> Reading:
        return await self.guard.resolve_owned_reading(user_id, sensor_id, reading_id)

    async def update(self, user_id: int, sensor_id: int, reading_id: int, changes: ReadingUpdate) -> Reading:
        """
        Overwrite some metric values and recompute every level label

        Corrections do not raise alerts; only ingestion does.
        """
        reading = await self.guard.resolve_owned_reading(user_id, sensor_id, reading_id)
        values = {**reading.metric_values(), **changes.provided_metrics()}
        reading.apply_metrics(values, level_labels(values, self.thresholds))
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("reading_update_failed", reading_id=reading_id, error=str(e))
            raise StorageError()

        logger.info("reading_updated", reading_id=reading_id, fields=sorted(changes.provided_metrics()))
        return reading

    async def delete(self, user_id: int, sensor_id: int, reading_id: int) -> None:
        reading = await self.guard.resolve_owned_reading(user_id, sensor_id, reading_id)
        try:
            await self.db.execute(delete(Reading).where(Reading.id == reading.id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("reading_delete_failed", reading_id=reading_id, error=str(e))
            raise StorageError()
        logger.info("reading_deleted", reading_id=reading_id, sensor_id=sensor_id)
