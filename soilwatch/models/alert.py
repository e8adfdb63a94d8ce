"""Alert model"""

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, ForeignKey
from datetime import datetime

from ..core.database import Base


class Alert(Base):
    """Alert raised against a sensor, either by threshold evaluation or by hand"""
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, index=True)
    sensor_id = Column(Integer, ForeignKey("sensors.id"), nullable=False, index=True)

    message = Column(Text, nullable=False)
    level = Column(String(50), nullable=False)  # Alerta, Crítico

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<Alert {self.id} sensor={self.sensor_id} level={self.level}>"
