"""User model"""

from sqlalchemy import Column, Integer, String, TIMESTAMP
from sqlalchemy.orm import relationship
from datetime import datetime

from ..core.database import Base


class User(Base):
    """Registered user; owns zero or more sensors"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False)

    # Relationships
    sensors = relationship("Sensor", back_populates="owner")

    def __repr__(self):
        return f"<User {self.id} {self.email}>"
