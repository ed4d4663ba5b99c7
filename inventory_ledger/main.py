# inventory_ledger/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from inventory_ledger.api.error_handlers import register_exception_handlers
from inventory_ledger.api.routers import ledger, models, system, users
from inventory_ledger.core.config import settings
from inventory_ledger.core.logging import get_logger, setup_logging
from inventory_ledger.db.session_async import AsyncSessionLocal, create_all, ping
from inventory_ledger.middleware import ObservabilityMiddleware

# --- Models registration (needed for create_all and Alembic) ---
import inventory_ledger.models.catalog  # noqa: F401
import inventory_ledger.models.ledger   # noqa: F401
import inventory_ledger.models.user     # noqa: F401

logger = get_logger("inventory_ledger")

TAGS_METADATA = [
    {"name": "models", "description": "Catalog items and their available stock."},
    {"name": "imports", "description": "Ledger of stock leaving the catalog."},
    {"name": "exports", "description": "Ledger of stock returning to the catalog."},
    {"name": "users", "description": "Role stored per external user id."},
    {"name": "system", "description": "Greeting, health check and metrics."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_all()
    try:
        async with AsyncSessionLocal() as session:
            await ping(session)
        logger.info("Pinged the database; connection is healthy")
    except SQLAlchemyError:
        logger.exception("Database ping failed at startup")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    description=(
        "Inventory catalog with an import/export stock ledger.\n\n"
        "- **Models**: catalog CRUD.\n"
        "- **Imports / Exports**: stock movements recorded per user.\n"
        "- **Users**: role lookup and assignment."
    ),
    openapi_tags=TAGS_METADATA,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# --- Middlewares ---
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Routers ---
app.include_router(system.router)
app.include_router(models.router)
app.include_router(ledger.imports_router)
app.include_router(ledger.exports_router)
app.include_router(users.router)


if __name__ == "__main__":
    uvicorn.run("inventory_ledger.main:app", host="0.0.0.0", port=settings.PORT)
