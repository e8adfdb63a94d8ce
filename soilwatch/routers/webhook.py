"""
Webhook Router

Devices post readings here with their sensor's webhook token in the query
string. The body is read raw so the token can be checked before any of it
is validated.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ..dependencies import get_ingestion_service
from ..schemas import IngestionResponse
from ..services import IngestionService

router = APIRouter(tags=["webhook"])


@router.post("/webhook/sensors/data", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
async def webhook_ingest(
    request: Request,
    token: Optional[str] = Query(None),
    service: IngestionService = Depends(get_ingestion_service)
):
    """
    Token-authenticated ingestion

    - 401: token missing
    - 403: token matches no sensor
    - 400: body invalid
    """
    try:
        data = await request.json()
    except ValueError:
        data = None

    result = await service.ingest_from_webhook(token, data)
    return IngestionResponse.from_result(result, "Reading received")
