"""Sensor model"""

from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from ..core.database import Base


class Sensor(Base):
    """
    Soil sensor

    user_id is NULL until the sensor is claimed. webhook_token is generated
    on creation, unique, and never rewritten.
    """
    __tablename__ = "sensors"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    sensor_name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    installed_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=True)

    # Credential for unauthenticated ingestion
    webhook_token = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="sensors")

    def __repr__(self):
        return f"<Sensor {self.id} owner={self.user_id}>"
