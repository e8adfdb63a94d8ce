"""Sensor reading model"""

from sqlalchemy import Column, Integer, Float, String, TIMESTAMP, ForeignKey
from datetime import datetime
from typing import Dict, Mapping

from ..core.database import Base
from ..evaluator import Severity
from ..thresholds import (
    SOIL_HUMIDITY, TEMPERATURE, CONDUTIVITY, PH, NITROGEN, PHOSPHORUS, POTASSIUM,
)

# metric name -> (value column, level column)
METRIC_COLUMNS: Dict[str, tuple] = {
    SOIL_HUMIDITY: ("soil_humidity", "level_humidity"),
    TEMPERATURE: ("temperature", "level_temperature"),
    CONDUTIVITY: ("condutivity", "level_condutivity"),
    PH: ("ph", "level_ph"),
    NITROGEN: ("nitrogen", "level_nitrogen"),
    PHOSPHORUS: ("phosphorus", "level_phosphorus"),
    POTASSIUM: ("potassium", "level_potassium"),
}


class Reading(Base):
    """
    One sample of the seven soil metrics

    The level_* columns are derived from the values by the evaluator on
    every write; they are never taken from client input.
    """
    __tablename__ = "sensor_readings"

    id = Column(Integer, primary_key=True, index=True)
    sensor_id = Column(Integer, ForeignKey("sensors.id"), nullable=False, index=True)

    # Metric values
    soil_humidity = Column(Float, nullable=False)
    temperature = Column(Float, nullable=False)
    condutivity = Column(Float, nullable=False)
    ph = Column(Float, nullable=False)
    nitrogen = Column(Float, nullable=False)
    phosphorus = Column(Float, nullable=False)
    potassium = Column(Float, nullable=False)

    # Derived tiers (Ideal, Alerta, Crítico)
    level_humidity = Column(String(50), nullable=True)
    level_temperature = Column(String(50), nullable=True)
    level_condutivity = Column(String(50), nullable=True)
    level_ph = Column(String(50), nullable=True)
    level_nitrogen = Column(String(50), nullable=True)
    level_phosphorus = Column(String(50), nullable=True)
    level_potassium = Column(String(50), nullable=True)

    captured_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, index=True)

    def metric_values(self) -> Dict[str, float]:
        return {metric: getattr(self, value_col) for metric, (value_col, _) in METRIC_COLUMNS.items()}

    def apply_metrics(self, values: Mapping[str, float], levels: Mapping[str, Severity]) -> None:
        """Write values and their labels together so they cannot drift apart"""
        for metric, (value_col, level_col) in METRIC_COLUMNS.items():
            setattr(self, value_col, values[metric])
            setattr(self, level_col, levels[metric].value)

    def __repr__(self):
        return f"<Reading {self.id} sensor={self.sensor_id}>"
