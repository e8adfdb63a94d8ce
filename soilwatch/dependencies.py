"""FastAPI dependencies wiring services to the request's DB session"""

from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .core.database import get_db
from .services import (
    AlertService,
    IngestionService,
    ReadingService,
    SensorService,
    UserService,
)
from .thresholds import DEFAULT_THRESHOLDS, ThresholdTable

# Path ids are SERIAL keys; out-of-range values are a 400, not a driver error
MAX_ROW_ID = 2**31 - 1
ResourceId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def get_thresholds(request: Request) -> ThresholdTable:
    """Table loaded at start-up; the built-in one if the lifespan did not run"""
    return getattr(request.app.state, "thresholds", DEFAULT_THRESHOLDS)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_sensor_service(db: AsyncSession = Depends(get_db)) -> SensorService:
    return SensorService(db)


def get_ingestion_service(
    db: AsyncSession = Depends(get_db),
    thresholds: ThresholdTable = Depends(get_thresholds)
) -> IngestionService:
    return IngestionService(db, thresholds)


def get_reading_service(
    db: AsyncSession = Depends(get_db),
    thresholds: ThresholdTable = Depends(get_thresholds)
) -> ReadingService:
    return ReadingService(db, thresholds)


def get_alert_service(db: AsyncSession = Depends(get_db)) -> AlertService:
    return AlertService(db)
