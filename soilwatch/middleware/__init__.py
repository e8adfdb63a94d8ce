"""HTTP middleware"""

from .request_tracing import RequestTracingMiddleware

__all__ = ["RequestTracingMiddleware"]
