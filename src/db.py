"""Database engine/session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from models import Base


def create_db_engine(db_url: str) -> Engine:
    """Create a SQLAlchemy engine with conservative defaults.

    SQLite connections are shared across the webhook's worker threads, so the
    same-thread check is disabled for them.
    """
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    return create_engine(db_url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def ensure_schema(engine: Engine) -> None:
    """Create league tables and their indexes if they do not exist."""
    Base.metadata.create_all(bind=engine)
