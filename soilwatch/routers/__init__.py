"""API routers"""

from . import alerts, auth, health, metrics, readings, sensors, users, webhook

__all__ = ["alerts", "auth", "health", "metrics", "readings", "sensors", "users", "webhook"]
