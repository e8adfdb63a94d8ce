"""Sensor schemas"""

from pydantic import Field
from typing import Optional
from datetime import datetime

from .base import CamelModel


class SensorCreate(CamelModel):
    """Body of POST /sensors"""
    sensor_name: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)


class SensorUpdate(SensorCreate):
    """Body of PUT /sensors/{id}; both fields required"""
    pass


class SensorResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    sensor_name: str
    location: str
    installed_at: Optional[datetime] = None
    webhook_token: str
