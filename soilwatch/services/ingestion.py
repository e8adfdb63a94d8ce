"""
Reading ingestion

Two entry points feed the same pipeline:

    ingest_for_user      bearer-authenticated, sensor resolved via OwnershipGuard
    ingest_from_webhook  sensor resolved from its webhook token

Pipeline (one transaction):
    1. Insert the reading with level labels computed by the evaluator
    2. Flush so the reading has an id
    3. Evaluate the values against the threshold table
    4. Insert one alert per candidate
    5. Commit

Any storage failure rolls the whole thing back; a reading is never left
behind without its alerts.
"""
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..evaluator import evaluate, level_labels
from ..exceptions import (
    AuthenticationError,
    InvalidWebhookTokenError,
    StorageError,
    ValidationError,
)
from ..logging_config import get_logger
from ..metrics import (
    MetricsTimer,
    ingestion_duration_seconds,
    track_alert_generated,
    track_ingestion_failure,
    track_reading_ingested,
    track_webhook_rejection,
)
from ..models import Alert, Reading, Sensor
from ..schemas.reading import ReadingCreate
from ..thresholds import ThresholdTable
from .ownership import OwnershipGuard

logger = get_logger(__name__)

SOURCE_API = "api"
SOURCE_WEBHOOK = "webhook"


@dataclass
class GeneratedAlert:
    """Alert row created by an ingestion, with the metric that triggered it"""
    alert: Alert
    metric: str


@dataclass
class IngestionResult:
    reading: Reading
    alerts: List[GeneratedAlert] = field(default_factory=list)


def parse_reading_payload(data: Any) -> ReadingCreate:
    """
    Validate a raw JSON body into a ReadingCreate

    Raises:
        ValidationError: body is not an object, or a metric is missing,
            non-numeric or not finite
    """
    if not isinstance(data, dict):
        raise ValidationError("body", "expected a JSON object")

    try:
        return ReadingCreate.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        first = errors[0]
        field_name = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(field_name, first["msg"], details={"errors": errors})


class IngestionService:
    """Persists readings and the alerts they trigger"""

    def __init__(self, db: AsyncSession, thresholds: ThresholdTable):
        self.db = db
        self.thresholds = thresholds
        self.guard = OwnershipGuard(db)

    async def ingest_for_user(self, user_id: int, sensor_id: int, payload: ReadingCreate) -> IngestionResult:
        """
        Raises:
            SensorNotFoundError: sensor missing or not owned by the caller
            StorageError: transaction failed and was rolled back
        """
        sensor = await self.guard.resolve_owned_sensor(user_id, sensor_id)
        return await self._ingest(sensor, payload, source=SOURCE_API)

    async def ingest_from_webhook(self, token: Optional[str], data: Any) -> IngestionResult:
        """
        Token-authenticated ingestion

        The token is checked before the body is looked at, so an unknown token
        never creates anything, whatever it sends.

        Raises:
            AuthenticationError: no token supplied (401)
            InvalidWebhookTokenError: token matches no sensor (403)
            ValidationError: body invalid (400)
        """
        if not token:
            track_webhook_rejection("missing")
            logger.warning("webhook_token_rejected", reason="missing")
            raise AuthenticationError("Webhook token is required")

        result = await self.db.execute(select(Sensor).where(Sensor.webhook_token == token))
        sensor = result.scalar_one_or_none()
        if sensor is None:
            track_webhook_rejection("unknown")
            logger.warning("webhook_token_rejected", reason="unknown")
            raise InvalidWebhookTokenError()

        payload = parse_reading_payload(data)
        return await self._ingest(sensor, payload, source=SOURCE_WEBHOOK)

    async def _ingest(self, sensor: Sensor, payload: ReadingCreate, source: str) -> IngestionResult:
        values = payload.metric_values()
        # Plain int: a rollback expires the ORM instance
        sensor_id = sensor.id
        started = time.perf_counter()

        try:
            with MetricsTimer(ingestion_duration_seconds, {"source": source}):
                reading = Reading(sensor_id=sensor_id)
                reading.apply_metrics(values, level_labels(values, self.thresholds))
                if payload.captured_at is not None:
                    reading.captured_at = payload.captured_at
                self.db.add(reading)
                await self.db.flush()

                generated = []
                for candidate in evaluate(values, self.thresholds):
                    alert = Alert(
                        sensor_id=sensor_id,
                        message=candidate.message,
                        level=candidate.level.value,
                    )
                    self.db.add(alert)
                    generated.append(GeneratedAlert(alert=alert, metric=candidate.metric))

                await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            track_ingestion_failure(source)
            logger.error(
                "reading_ingest_failed",
                sensor_id=sensor_id,
                source=source,
                error=str(e),
            )
            raise StorageError()

        track_reading_ingested(source)
        for item in generated:
            track_alert_generated(item.metric, item.alert.level)
            logger.info(
                "alert_generated",
                sensor_id=sensor_id,
                alert_id=item.alert.id,
                metric=item.metric,
                level=item.alert.level,
            )

        logger.info(
            "reading_ingested",
            sensor_id=sensor_id,
            reading_id=reading.id,
            source=source,
            alert_count=len(generated),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return IngestionResult(reading=reading, alerts=generated)
