"""
Alerts Router

Route shapes are kept as existing clients call them: creation and lookup
hang off the sensor, edits address the alert directly.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ..auth import get_current_user_id
from ..dependencies import ResourceId, get_alert_service
from ..exceptions import RecordNotFoundError
from ..schemas import AlertCreate, AlertResponse, AlertUpdate, MessageResponse
from ..services import AlertService

router = APIRouter(tags=["alerts"])


@router.post("/sensors/{sensor_id}/alert", response_model=AlertResponse, status_code=status.HTTP_201_CREATED)
async def create_alert(
    sensor_id: ResourceId,
    body: AlertCreate,
    user_id: int = Depends(get_current_user_id),
    service: AlertService = Depends(get_alert_service)
):
    return await service.create(user_id, sensor_id, body.message, body.level)


@router.get("/sensor/{sensor_id}/alerts", response_model=List[AlertResponse])
async def list_alerts(
    sensor_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: AlertService = Depends(get_alert_service)
):
    alerts = await service.list(user_id, sensor_id)
    if not alerts:
        raise RecordNotFoundError("Alerts", sensor_id)
    return alerts


@router.get("/sensors/{sensor_id}/alerts/{alert_id}", response_model=AlertResponse)
async def get_alert(
    sensor_id: ResourceId,
    alert_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: AlertService = Depends(get_alert_service)
):
    return await service.get(user_id, sensor_id, alert_id)


@router.put("/alert/{alert_id}", response_model=AlertResponse)
async def update_alert(
    alert_id: ResourceId,
    body: AlertUpdate,
    user_id: int = Depends(get_current_user_id),
    service: AlertService = Depends(get_alert_service)
):
    return await service.update(user_id, alert_id, body.message, body.level)


@router.delete("/alert/{alert_id}", response_model=MessageResponse)
async def delete_alert(
    alert_id: ResourceId,
    user_id: int = Depends(get_current_user_id),
    service: AlertService = Depends(get_alert_service)
):
    await service.delete(user_id, alert_id)
    return MessageResponse(message="Alert deleted")
