from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_ledger.core.config import settings
from inventory_ledger.core.logging import get_logger
from inventory_ledger.core.metrics import export_metrics
from inventory_ledger.db.session_async import get_async_db, ping

router = APIRouter(tags=["system"])
logger = get_logger(__name__)


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return settings.GREETING


@router.get("/health")
async def health(db: AsyncSession = Depends(get_async_db)):
    try:
        await ping(db)
    except SQLAlchemyError:
        logger.exception("Health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Database unavailable"},
        )
    return {"status": "ok"}


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    payload, content_type = export_metrics()
    return Response(content=payload, media_type=content_type)
