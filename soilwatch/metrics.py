"""
Prometheus Metrics for SoilWatch

Metrics Categories:
- Ingest: readings stored, alerts generated, webhook token rejections
- Ownership: sensor claim outcomes
- API: request counts and latency
"""
import time
from typing import Optional
from prometheus_client import (
    Counter, Histogram,
    CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST
)

# Custom registry so tests can import the module repeatedly without duplicate-collector errors
registry = CollectorRegistry()

# ============================================================
# Ingest Metrics
# ============================================================

readings_ingested_total = Counter(
    'readings_ingested_total',
    'Total sensor readings persisted',
    ['source'],  # api, webhook
    registry=registry
)

alerts_generated_total = Counter(
    'alerts_generated_total',
    'Total alerts generated by threshold evaluation',
    ['metric', 'level'],
    registry=registry
)

ingestion_failures_total = Counter(
    'ingestion_failures_total',
    'Ingestion calls rolled back after a storage failure',
    ['source'],
    registry=registry
)

ingestion_duration_seconds = Histogram(
    'ingestion_duration_seconds',
    'Reading ingestion duration (store + evaluate + alerts) in seconds',
    ['source'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=registry
)

webhook_token_rejections_total = Counter(
    'webhook_token_rejections_total',
    'Webhook requests rejected for a missing or unknown sensor token',
    ['reason'],  # missing, unknown
    registry=registry
)

# ============================================================
# Ownership Metrics
# ============================================================

sensor_claims_total = Counter(
    'sensor_claims_total',
    'Sensor claim attempts',
    ['outcome'],  # claimed, conflict, error
    registry=registry
)

# ============================================================
# API Metrics
# ============================================================

api_requests_total = Counter(
    'api_requests_total',
    'Total API requests',
    ['method', 'endpoint', 'status_code'],
    registry=registry
)

api_request_duration_seconds = Histogram(
    'api_request_duration_seconds',
    'API request duration in seconds',
    ['method', 'endpoint'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=registry
)

# ============================================================
# Helpers
# ============================================================

class MetricsTimer:
    """Context manager for timing operations"""

    def __init__(self, histogram, labels: Optional[dict] = None):
        self.histogram = histogram
        self.labels = labels or {}
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.perf_counter() - self.start_time
        if self.labels:
            self.histogram.labels(**self.labels).observe(duration)
        else:
            self.histogram.observe(duration)


def track_reading_ingested(source: str):
    readings_ingested_total.labels(source=source).inc()


def track_alert_generated(metric: str, level: str):
    alerts_generated_total.labels(metric=metric, level=level).inc()


def track_ingestion_failure(source: str):
    ingestion_failures_total.labels(source=source).inc()


def track_webhook_rejection(reason: str):
    webhook_token_rejections_total.labels(reason=reason).inc()


def track_sensor_claim(outcome: str):
    sensor_claims_total.labels(outcome=outcome).inc()


def track_api_request(method: str, endpoint: str, status_code: int, duration: Optional[float] = None):
    """Track API request"""
    api_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code)
    ).inc()

    if duration is not None:
        api_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics_text() -> bytes:
    """Get metrics in Prometheus text format"""
    return generate_latest(registry)


def get_metrics_content_type() -> str:
    """Get Prometheus content type"""
    return CONTENT_TYPE_LATEST
