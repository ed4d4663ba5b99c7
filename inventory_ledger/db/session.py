# inventory_ledger/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from inventory_ledger.core.config import settings

# SQLite requires special connect args for multi-thread access.
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

Base = declarative_base()
