"""SQLAlchemy models"""

from .user import User
from .sensor import Sensor
from .reading import Reading, METRIC_COLUMNS
from .alert import Alert

__all__ = [
    "User",
    "Sensor",
    "Reading",
    "METRIC_COLUMNS",
    "Alert",
]
