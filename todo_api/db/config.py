"""Database engine construction and per-request sessions."""
from typing import Generator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine that serves as the application's storage handle.

    SQLite connections get foreign key enforcement switched on; file
    databases also use WAL for better read concurrency.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    is_memory = _is_memory_sqlite(database_url)
    engine_kwargs = {"connect_args": {"check_same_thread": False}}
    if is_memory:
        # One shared connection, otherwise every checkout sees an empty database
        engine_kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, echo=echo, **engine_kwargs)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not is_memory:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def get_session(request: Request) -> Generator[Session, None, None]:
    """Dependency yielding one session per request from the app's engine."""
    with Session(request.app.state.engine) as session:
        yield session
