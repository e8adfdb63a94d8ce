"""Alert schemas"""

from pydantic import Field
from typing import List, Literal
from datetime import datetime

from .base import CamelModel
from .reading import ReadingResponse

AlertLevel = Literal["Alerta", "Crítico"]


class AlertCreate(CamelModel):
    message: str = Field(min_length=1)
    level: AlertLevel


class AlertUpdate(AlertCreate):
    pass


class AlertResponse(CamelModel):
    id: int
    sensor_id: int
    message: str
    level: str
    created_at: datetime


class GeneratedAlertResponse(AlertResponse):
    """Alert created by an ingestion call, with the metric that triggered it"""
    metric: str


class IngestionResponse(CamelModel):
    message: str
    reading: ReadingResponse
    alerts: List[GeneratedAlertResponse]

    @classmethod
    def from_result(cls, result, message: str) -> "IngestionResponse":
        """Build from an IngestionResult (reading plus GeneratedAlert pairs)"""
        return cls(
            message=message,
            reading=ReadingResponse.model_validate(result.reading),
            alerts=[
                GeneratedAlertResponse(
                    id=item.alert.id,
                    sensor_id=item.alert.sensor_id,
                    message=item.alert.message,
                    level=item.alert.level,
                    created_at=item.alert.created_at,
                    metric=item.metric,
                )
                for item in result.alerts
            ],
        )
