"""
Sensors Router

CRUD on the caller's sensors plus the claim endpoint for unowned ones.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ..auth import get_current_user_id
from ..dependencies import ResourceId, get_sensor_service
from ..exceptions import RecordNotFoundError
from ..schemas import MessageResponse, SensorCreate, SensorResponse, SensorUpdate
from ..services import SensorService

router = APIRouter(prefix="/sensors", tags=["sensors"])


@router.post("", response_model=SensorResponse, status_code=status.HTTP_201_CREATED)
async def create_sensor(
    body: SensorCreate,
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    """Register a sensor owned by the caller; the response carries its webhook token"""
    return await service.create(user_id, body.sensor_name, body.location)


@router.get("", response_model=List[SensorResponse])
async def list_sensors(
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    sensors = await service.list(user_id)
    if not sensors:
        raise RecordNotFoundError("Sensors", user_id)
    return sensors


@router.get("/{sensor_id}", response_model=SensorResponse)
async def get_sensor(
    sensor_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    return await service.get(user_id, sensor_id)


@router.put("/{sensor_id}", response_model=SensorResponse)
async def update_sensor(
    sensor_id: ResourceId,
    body: SensorUpdate,
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    return await service.update(user_id, sensor_id, body.sensor_name, body.location)


@router.delete("/{sensor_id}", response_model=MessageResponse)
async def delete_sensor(
    sensor_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    await service.delete(user_id, sensor_id)
    return MessageResponse(message="Sensor deleted")


@router.patch("/{sensor_id}/assign", response_model=SensorResponse)
async def claim_sensor(
    sensor_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: SensorService = Depends(get_sensor_service)
):
    """
    Claim an unowned sensor

    404 both when the sensor does not exist and when somebody already owns it.
    """
    return await service.claim(user_id, sensor_id)
