"""
Readings Router

Authenticated ingestion and management of readings under an owned sensor.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ..auth import get_current_user_id
from ..dependencies import ResourceId, get_ingestion_service, get_reading_service
from ..exceptions import RecordNotFoundError
from ..schemas import (
    IngestionResponse,
    MessageResponse,
    ReadingCreate,
    ReadingResponse,
    ReadingUpdate,
)
from ..services import IngestionService, ReadingService

router = APIRouter(prefix="/sensors/{sensor_id}/data", tags=["readings"])


@router.post("", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
async def ingest_reading(
    sensor_id: ResourceId,
    body: ReadingCreate,
    user_id: int = Depends(get_current_user_id),
    service: IngestionService = Depends(get_ingestion_service)
):
    """Store a reading and any alerts it triggers"""
    result = await service.ingest_for_user(user_id, sensor_id, body)
    return IngestionResponse.from_result(result, "Reading stored")


@router.get("", response_model=List[ReadingResponse])
async def list_readings(
    sensor_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: ReadingService = Depends(get_reading_service)
):
    readings = await service.list(user_id, sensor_id)
    if not readings:
        raise RecordNotFoundError("Readings", sensor_id)
    return readings


@router.get("/{reading_id}", response_model=ReadingResponse)
async def get_reading(
    sensor_id: ResourceId,
    reading_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: ReadingService = Depends(get_reading_service)
):
    return await service.get(user_id, sensor_id, reading_id)


@router.put("/{reading_id}", response_model=ReadingResponse)
async def update_reading(
    sensor_id: ResourceId,
    reading_id: ResourceId,
    body: ReadingUpdate,
    user_id: int = Depends(get_current_user_id),
    service: ReadingService = Depends(get_reading_service)
):
    """Correct metric values; level labels are recomputed, no alerts are raised"""
    return await service.update(user_id, sensor_id, reading_id, body)


@router.delete("/{reading_id}", response_model=MessageResponse)
async def delete_reading(
    sensor_id: ResourceId,
    reading_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: ReadingService = Depends(get_reading_service)
):
    await service.delete(user_id, sensor_id, reading_id)
    return MessageResponse(message="Reading deleted")
