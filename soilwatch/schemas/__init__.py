"""Pydantic schemas for API validation"""

from .base import CamelModel, MessageResponse
from .user import UserRegister, UserLogin, UserUpdate, TokenResponse
from .sensor import SensorCreate, SensorUpdate, SensorResponse
from .reading import ReadingCreate, ReadingUpdate, ReadingResponse
from .alert import (
    AlertCreate, AlertUpdate, AlertResponse,
    GeneratedAlertResponse, IngestionResponse,
)

__all__ = [
    "CamelModel", "MessageResponse",
    "UserRegister", "UserLogin", "UserUpdate", "TokenResponse",
    "SensorCreate", "SensorUpdate", "SensorResponse",
    "ReadingCreate", "ReadingUpdate", "ReadingResponse",
    "AlertCreate", "AlertUpdate", "AlertResponse",
    "GeneratedAlertResponse", "IngestionResponse",
]
