"""
Jotter Backend: Note Store
===========================

What:  The persistence component: one object wrapping the `notes` table.
How:   Owns the async engine and session factory. Every public operation runs
       in its own session and transaction, and translates SQLAlchemy failures
       into StorageError / DuplicateContentError.
Who:   Constructed by the application factory, stored on app.state.store and
       injected into the route handlers with Depends(get_store).
When:  initialize() once at startup, dispose() once at shutdown; operations
       in between are called once per request.

Operation Summary:
    initialize()            CREATE TABLE IF NOT EXISTS (idempotent)
    create(content)         INSERT, returns the inserted row
    create_and_list(c)      INSERT + SELECT * in one transaction
    list_all()              SELECT * (no ordering guarantee)
    get_by_id(id)           SELECT ... WHERE id = :id LIMIT 1, as a 0/1 list
    delete_all()            DELETE FROM notes (no-op when empty)
    delete_by_id(id)        DELETE ... WHERE id = :id (no-op when absent)

Error Handling:
    Any SQLAlchemyError   → StorageError (original error kept in context)
    Driver bind errors    → StorageError (UnicodeError, OverflowError)
    IntegrityError        → DuplicateContentError
    Non-integer id or id  → ValidationError, raised before touching the DB
    outside 64-bit range

    A failed transaction is rolled back by `session.begin()`, so a rejected
    insert never changes the row count.
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Union

from fastapi import Request
from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.database import Base, create_engine_for, create_session_factory
from jotter.exceptions import DuplicateContentError, StorageError, ValidationError
from jotter.models.note import Note

logger = logging.getLogger(__name__)

NoteId = Union[str, int]

# SQLite INTEGER is a signed 64-bit value
MIN_NOTE_ID = -(2 ** 63)
MAX_NOTE_ID = 2 ** 63 - 1

_DECIMAL_ID = re.compile(r"-?[0-9]+")


def coerce_note_id(note_id: NoteId) -> int:
    """
    Convert an external id (path parameter string or int) to an integer key.

    Accepts plain ASCII decimal only: "1_000", "+5" and non-ASCII digits are
    rejected, as is anything outside SQLite's INTEGER range.

    Raises:
        ValidationError: the id is not an integer ("abc", "1.5", "", True)
            or does not fit in a signed 64-bit integer
    """
    if isinstance(note_id, bool):
        raise ValidationError(message="Note id must be an integer", field="id")
    if isinstance(note_id, int):
        key = note_id
    else:
        raw = str(note_id).strip()
        if not _DECIMAL_ID.fullmatch(raw):
            raise ValidationError(
                message="Note id must be an integer",
                field="id",
                context={"value": raw[:64]},
            )
        key = int(raw)

    if not MIN_NOTE_ID <= key <= MAX_NOTE_ID:
        raise ValidationError(
            message="Note id is out of range",
            field="id",
            context={"value": str(note_id)[:64]},
        )
    return key


class NoteStore:
    """
    Durable storage for Notes.

    Attributes:
        database_url: The URL the engine was built from
        engine: Async SQLAlchemy engine (one per store, process lifetime)
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine_for(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Create the notes table if it does not exist yet."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise self._storage_error("initialize", e)
        logger.info("Note store initialized (%s)", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Note store disposed")

    async def ping(self) -> bool:
        """Run SELECT 1; False when the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """
        Session + transaction for one store operation.

        Commits on success, rolls back on any exception, and maps SQLAlchemy
        errors and driver bind errors to the application's storage exceptions.
        """
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as e:
                raise DuplicateContentError(
                    context={"operation": operation, "original_error": str(e.orig)},
                )
            except SQLAlchemyError as e:
                raise self._storage_error(operation, e)
            except (UnicodeError, OverflowError) as e:
                # Raised by the sqlite3 driver while binding parameters
                raise self._storage_error(operation, e)

    @staticmethod
    def _storage_error(operation: str, e: Exception) -> StorageError:
        return StorageError(
            message=f"Storage operation '{operation}' failed",
            context={
                "operation": operation,
                "error_type": type(e).__name__,
                "original_error": str(e),
            },
        )

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, content: str) -> Note:
        """
        Insert a note and return the stored row (with its generated id).

        Raises:
            DuplicateContentError: a note with identical content exists
            StorageError: any other database failure
        """
        async with self._transaction("create") as session:
            note = Note(content=content)
            session.add(note)
            await session.flush()  # Emits the INSERT; assigns note.id
        logger.info("Note created: id=%s", note.id)
        return note

    async def create_and_list(self, content: str) -> List[Note]:
        """
        Insert a note, then read back the whole table, in one transaction.

        The returned list always contains the new row; concurrent requests
        cannot slip a delete between the two statements.
        """
        async with self._transaction("create") as session:
            note = Note(content=content)
            session.add(note)
            await session.flush()
            result = await session.execute(select(Note))
            notes = list(result.scalars().all())
        logger.info("Note created: id=%s (%d notes stored)", note.id, len(notes))
        return notes

    async def delete_all(self) -> None:
        """Remove every note. Succeeds on an empty table."""
        async with self._transaction("delete_all") as session:
            result = await session.execute(delete(Note))
        logger.info("Deleted all notes (%d rows)", result.rowcount)

    async def delete_by_id(self, note_id: NoteId) -> None:
        """
        Remove the note with this id, if any.

        Raises:
            ValidationError: note_id is not an integer
            StorageError: database failure
        """
        key = coerce_note_id(note_id)
        async with self._transaction("delete_by_id") as session:
            result = await session.execute(delete(Note).where(Note.id == key))
        logger.info("Delete note id=%s: %d row(s) removed", key, result.rowcount)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_all(self) -> List[Note]:
        """
        Every stored note, fully materialized.

        Callers must not depend on the order of the result.
        """
        async with self._transaction("list_all") as session:
            result = await session.execute(select(Note))
            return list(result.scalars().all())

    async def get_by_id(self, note_id: NoteId) -> List[Note]:
        """
        Look a note up by primary key.

        Returns:
            A list holding the note, or an empty list when no row matches.

        Raises:
            ValidationError: note_id is not an integer
            StorageError: database failure
        """
        key = coerce_note_id(note_id)
        async with self._transaction("get_by_id") as session:
            result = await session.execute(
                select(Note).where(Note.id == key).limit(1)
            )
            return list(result.scalars().all())

    async def count(self) -> int:
        """Number of stored notes."""
        async with self._transaction("count") as session:
            result = await session.execute(select(func.count(Note.id)))
            return result.scalar() or 0


# ── Dependency ────────────────────────────────────────────────────────────
def get_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the application's shared NoteStore.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(store: NoteStore = Depends(get_store)):
            return await store.list_all()
    """
    return request.app.state.store
