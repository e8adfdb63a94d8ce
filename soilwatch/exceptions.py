"""
Custom exceptions for SoilWatch
Each exception carries the HTTP status the API answers with
"""
from typing import Optional, Any


class SoilWatchException(Exception):
    """Base exception for all SoilWatch errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }

# ============================================================
# Configuration / Storage Exceptions
# ============================================================

class ConfigurationError(SoilWatchException):
    """Invalid configuration detected at start-up"""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="CONFIGURATION_ERROR")


class StorageError(SoilWatchException):
    """Unexpected persistence failure; the message never carries driver detail"""

    status_code = 500

    def __init__(self, message: str = "Server error, please try again"):
        super().__init__(message=message, error_code="STORAGE_ERROR")

# ============================================================
# Not Found Exceptions
# ============================================================

class RecordNotFoundError(SoilWatchException):
    """Record not found, or not visible to the caller"""

    status_code = 404

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found",
            error_code="RECORD_NOT_FOUND",
            details={"resource": resource, "identifier": str(identifier)}
        )


class UserNotFoundError(RecordNotFoundError):
    def __init__(self, identifier: Any):
        super().__init__("User", identifier)


class SensorNotFoundError(RecordNotFoundError):
    """Sensor missing or owned by someone else; both cases look the same"""

    def __init__(self, sensor_id: Any):
        super().__init__("Sensor", sensor_id)
        self.sensor_id = sensor_id


class ReadingNotFoundError(RecordNotFoundError):
    def __init__(self, reading_id: Any):
        super().__init__("Reading", reading_id)
        self.reading_id = reading_id


class AlertNotFoundError(RecordNotFoundError):
    def __init__(self, alert_id: Any):
        super().__init__("Alert", alert_id)
        self.alert_id = alert_id


class SensorClaimConflictError(SensorNotFoundError):
    """Claim lost: sensor does not exist or already has an owner"""

    def __init__(self, sensor_id: Any):
        super().__init__(sensor_id)
        self.message = "Sensor not found or already assigned to a user"
        self.error_code = "SENSOR_NOT_CLAIMABLE"
        self.args = (self.message,)

# ============================================================
# Business Logic Exceptions
# ============================================================

class DuplicateResourceError(SoilWatchException):
    """Resource already exists"""

    status_code = 409

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} already exists: {identifier}",
            error_code="DUPLICATE_RESOURCE",
            details={"resource": resource, "identifier": str(identifier)}
        )

# ============================================================
# Validation Exceptions
# ============================================================

class ValidationError(SoilWatchException):
    """Input validation error"""

    status_code = 400

    def __init__(self, field: str, message: str, details: Optional[dict] = None):
        super().__init__(
            message=f"Validation error for {field}: {message}",
            error_code="VALIDATION_ERROR",
            details={"field": field, "error": message, **(details or {})}
        )

# ============================================================
# Authentication Exceptions
# ============================================================

class AuthenticationError(SoilWatchException):
    """Authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR"
        )


class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__("Incorrect password")
        self.error_code = "INVALID_CREDENTIALS"


class InvalidWebhookTokenError(AuthenticationError):
    """Webhook token present but unknown"""

    status_code = 403

    def __init__(self):
        super().__init__("Invalid webhook token")
        self.error_code = "INVALID_WEBHOOK_TOKEN"
