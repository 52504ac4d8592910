"""Database session and connectivity helpers for the API service.

This module centralizes SQLAlchemy engine/session construction and provides the
FastAPI dependency (`get_db`) used by route handlers.

Design goals:
- single source of truth for DATABASE_URL parsing
- short-lived, request-scoped DB sessions
- safe teardown/rollback on errors
"""

from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model."""


def normalize_database_url(url: str) -> str:
    """Map Heroku-style `postgres://` URLs onto the psycopg2 driver."""
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg2://" + url[len("postgresql://"):]
    return url


def build_engine(url: str, echo: bool = False, pool_size: int = 5) -> Engine:
    """Create the SQLAlchemy engine for `url`.

    SQLite needs cross-thread access (FastAPI runs sync handlers in a thread
    pool), and an in-memory SQLite database must share a single connection or
    every checkout would see an empty database.
    """
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo, pool_size=pool_size, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    # expire_on_commit=False keeps returned entities readable after commit
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    """Create any missing tables for the registered models."""
    from . import models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(engine)


@contextmanager
def unit_of_work(session: Session):
    """Commit on success, roll back on any exception, then re-raise.

    Wraps one logical write so that a Player and its owned profile are
    persisted (or removed) together.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def get_db(request: Request):
    """FastAPI dependency that yields a request-scoped SQLAlchemy session.

    Route handlers declare `db: Session = Depends(get_db)` to receive a session
    bound to the engine created by the application factory.

    Yields:
        sqlalchemy.orm.Session: An open SQLAlchemy session for the duration of the request.

    Notes:
        A new session is created per request and always closed in `finally`.
        Transaction boundaries are owned by the store (`unit_of_work`).
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
