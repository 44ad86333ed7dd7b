"""
Jotter Backend: Database Engine Setup
======================================

What:  Async SQLAlchemy engine factory, session factory, and the ORM base class.
How:   NoteStore calls create_engine_for() once at construction and keeps the
       engine for the lifetime of the process.
Who:   Used by services/note_store.py and models/note.py.

Connection Strategy:
    File database (sqlite+aiosqlite:///./jotter.db):
        SQLAlchemy's default async pool; each session checks out a connection.
    In-memory database (sqlite+aiosqlite:///:memory:):
        StaticPool; every session shares ONE connection. Each new SQLite
        connection to :memory: opens its own empty database, so a pool of
        several connections would lose the table between requests.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Its metadata is what NoteStore.initialize() creates on startup.
    """
    pass


def is_memory_database(database_url: str) -> bool:
    """True when the URL names an in-memory SQLite database."""
    url = make_url(database_url)
    if not url.get_backend_name().startswith("sqlite"):
        return False
    return url.database in (None, "", ":memory:")


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Build the async engine for a database URL.

    Args:
        database_url: Async SQLAlchemy URL (sqlite+aiosqlite://...)
        echo: Log every SQL statement (enabled when LOG_LEVEL=DEBUG)
    """
    if is_memory_database(database_url):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Catches stale connections before use
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False: rows stay readable after the session closes, so
    the store can hand detached Note objects back to the handlers.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
