"""Sensor reading schemas"""

from pydantic import ConfigDict, Field, field_validator, model_validator
from typing import Annotated, Dict, Optional
from datetime import datetime, timezone

from .base import CamelModel
from ..models.reading import METRIC_COLUMNS

# Ints and floats only (no numeric strings or booleans), finite
MetricFloat = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class ReadingCreate(CamelModel):
    """
    Seven metric values for one sample

    Device payloads may also carry level_* labels; they are ignored and
    recomputed server-side.
    """
    model_config = ConfigDict(extra="ignore")

    soil_humidity: MetricFloat
    temperature: MetricFloat
    condutivity: MetricFloat
    ph: MetricFloat
    nitrogen: MetricFloat
    phosphorus: MetricFloat
    potassium: MetricFloat

    captured_at: Optional[datetime] = None

    @field_validator("captured_at")
    @classmethod
    def to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Timestamp columns are naive UTC; convert offsets rather than drop them"""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    def metric_values(self) -> Dict[str, float]:
        """Values keyed by metric name (soilHumidity, temperature, ...)"""
        return {metric: getattr(self, value_col) for metric, (value_col, _) in METRIC_COLUMNS.items()}


class ReadingUpdate(CamelModel):
    """Partial overwrite of metric values; at least one must be given"""
    soil_humidity: Optional[MetricFloat] = None
    temperature: Optional[MetricFloat] = None
    condutivity: Optional[MetricFloat] = None
    ph: Optional[MetricFloat] = None
    nitrogen: Optional[MetricFloat] = None
    phosphorus: Optional[MetricFloat] = None
    potassium: Optional[MetricFloat] = None

    @model_validator(mode="after")
    def require_one_metric(self):
        if not self.provided_metrics():
            raise ValueError("at least one metric value is required")
        return self

    def provided_metrics(self) -> Dict[str, float]:
        return {
            metric: getattr(self, value_col)
            for metric, (value_col, _) in METRIC_COLUMNS.items()
            if getattr(self, value_col) is not None
        }


class ReadingResponse(CamelModel):
    id: int
    sensor_id: int

    soil_humidity: float
    level_humidity: Optional[str] = None
    temperature: float
    level_temperature: Optional[str] = None
    condutivity: float
    level_condutivity: Optional[str] = None
    ph: float
    level_ph: Optional[str] = None
    nitrogen: float
    level_nitrogen: Optional[str] = None
    phosphorus: float
    level_phosphorus: Optional[str] = None
    potassium: float
    level_potassium: Optional[str] = None

    captured_at: datetime
