from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from inventory_ledger.core.logging import get_logger
from inventory_ledger.services.exceptions import (
    InsufficientStockError,
    ResourceNotFoundError,
    ServiceError,
    StoreFailureError,
)

logger = get_logger("inventory_ledger.errors")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ResourceNotFoundError)
    async def handle_not_found(_: Request, exc: ResourceNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": exc.detail})

    @app.exception_handler(InsufficientStockError)
    async def handle_insufficient_stock(_: Request, exc: InsufficientStockError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.detail})

    @app.exception_handler(StoreFailureError)
    async def handle_store_failure(_: Request, exc: StoreFailureError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": exc.detail})

    @app.exception_handler(ServiceError)
    async def handle_service_error(_: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": exc.detail})

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Unhandled store error",
            exc_info=exc,
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
