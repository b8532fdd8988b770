"""
Engine and session handling for the credit database.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool, StaticPool

from cliquealo.config import get_settings
from cliquealo.db.models import Base

IN_MEMORY_SQLITE_URL = "sqlite:///:memory:"


def create_db_engine(database_url: str) -> Engine:
    """
    Build an engine with the pool suited to the backend.

    PostgreSQL connections are not pooled. An in-memory SQLite database
    lives in a single shared connection, so every session sees the same tables.
    """
    if database_url.startswith("postgresql"):
        return create_engine(database_url, poolclass=NullPool)

    connect_args = {"check_same_thread": False}
    if database_url == IN_MEMORY_SQLITE_URL:
        return create_engine(
            database_url, connect_args=connect_args, poolclass=StaticPool
        )
    return create_engine(database_url, connect_args=connect_args)


engine = create_db_engine(get_settings().database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = engine):
    """Create the bancos, creditos and amortizacion_detalle tables."""
    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for FastAPI routes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """Session for scripts: commits on success, rolls back on any error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
