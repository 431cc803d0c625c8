# app/database.py
from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings
from app.core.errors import ConfigurationError

# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# Supabase Session mode limits the number of clients; the SQLAlchemy
# default pool (5+) quickly hits "MaxClientsInSessionMode".
#
# The engine is built on first use: the sync job only talks to the
# Supabase REST API and must not require DATABASE_URL.
# ---------------------------------------------------------


def _with_sslmode(db_url: str) -> str:
    """Append sslmode=require if it is not already present."""
    if "sslmode=" in db_url:
        return db_url
    separator = "&" if "?" in db_url else "?"
    return f"{db_url}{separator}sslmode=require"


@lru_cache
def get_engine() -> Engine:
    db_url = get_settings().DATABASE_URL
    if not db_url:
        raise ConfigurationError("DATABASE_URL environment variable is required")

    if not db_url.startswith("postgres"):
        # local sqlite etc.
        return create_engine(db_url, echo=False)

    return create_engine(
        _with_sslmode(db_url),
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(get_engine())


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(get_engine()) as session:
        yield session
