"""Business logic services"""

from .ownership import OwnershipGuard
from .ingestion import IngestionService, IngestionResult, GeneratedAlert, parse_reading_payload
from .sensors import SensorService
from .users import UserService
from .readings import ReadingService
from .alerts import AlertService

__all__ = [
    "OwnershipGuard",
    "IngestionService",
    "IngestionResult",
    "GeneratedAlert",
    "parse_reading_payload",
    "SensorService",
    "UserService",
    "ReadingService",
    "AlertService",
]
