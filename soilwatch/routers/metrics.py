"""
Metrics Router - Prometheus Endpoint

Exposes /metrics endpoint for Prometheus scraping
"""
from fastapi import APIRouter, Response
from ..metrics import get_metrics_text, get_metrics_content_type

router = APIRouter(tags=["observability"])


@router.get("/metrics")
async def prometheus_metrics():
    """
    Prometheus metrics endpoint

    Exposes ingestion, alert and claim counters but no readings or tokens.
    """
    return Response(
        content=get_metrics_text(),
        media_type=get_metrics_content_type()
    )
