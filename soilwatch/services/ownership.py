"""
Ownership Guard

Every sensor-, reading- and alert-scoped operation resolves its target
through this class before acting. The chain is always

    Reading / Alert -> Sensor -> User

and a sensor counts as owned by a user only when sensors.user_id equals
that user's id. A sensor that is missing, unowned, or owned by someone else
produces the same SensorNotFoundError, so callers cannot probe for the
existence of other users' sensors.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import AlertNotFoundError, ReadingNotFoundError, SensorNotFoundError
from ..models import Alert, Reading, Sensor


class OwnershipGuard:
    """Resolves entities on behalf of a user, enforcing the ownership chain"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_owned_sensor(self, user_id: int, sensor_id: int) -> Sensor:
        """
        Raises:
            SensorNotFoundError: sensor missing, unowned, or owned by another user
        """
        result = await self.db.execute(
            select(Sensor).where(Sensor.id == sensor_id, Sensor.user_id == user_id)
        )
        sensor = result.scalar_one_or_none()
        if sensor is None:
            raise SensorNotFoundError(sensor_id)
        return sensor

    async def resolve_owned_reading(self, user_id: int, sensor_id: int, reading_id: int) -> Reading:
        """
        Resolve the sensor first; the reading is only looked up once that succeeds

        Raises:
            SensorNotFoundError: sensor not owned by the user
            ReadingNotFoundError: no reading with that id under the sensor
        """
        sensor = await self.resolve_owned_sensor(user_id, sensor_id)
        result = await self.db.execute(
            select(Reading).where(Reading.id == reading_id, Reading.sensor_id == sensor.id)
        )
        reading = result.scalar_one_or_none()
        if reading is None:
            raise ReadingNotFoundError(reading_id)
        return reading

    async def resolve_owned_alert(
        self,
        user_id: int,
        alert_id: int,
        sensor_id: Optional[int] = None
    ) -> Alert:
        """
        Alert joined to its sensor and filtered on the sensor's owner

        Args:
            sensor_id: When given, the alert must also belong to this sensor

        Raises:
            AlertNotFoundError: alert missing or not under one of the user's sensors
        """
        query = (
            select(Alert)
            .join(Sensor, Alert.sensor_id == Sensor.id)
            .where(Alert.id == alert_id, Sensor.user_id == user_id)
        )
        if sensor_id is not None:
            query = query.where(Alert.sensor_id == sensor_id)

        result = await self.db.execute(query)
        alert = result.scalar_one_or_none()
        if alert is None:
            raise AlertNotFoundError(alert_id)
        return alert

    async def list_owned_sensors(self, user_id: int) -> List[Sensor]:
        result = await self.db.execute(
            select(Sensor).where(Sensor.user_id == user_id).order_by(Sensor.id)
        )
        return list(result.scalars().all())
