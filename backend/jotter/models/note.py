"""
Jotter Backend: Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
How:   Inherits from the DeclarativeBase in database.py; NoteStore.initialize()
       creates the table from this definition.

Table:
    notes(id INTEGER PRIMARY KEY AUTOINCREMENT, content TEXT NOT NULL UNIQUE)

    AUTOINCREMENT makes SQLite hand out strictly increasing ids that are never
    reused, even after the highest row (or every row) has been deleted.
    UNIQUE(content) is the single place duplicate notes are rejected.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from jotter.database import Base


class Note(Base):
    """
    A stored text note.

    Lifecycle:
        1. Created by POST /notes
        2. Never updated in place
        3. Deleted individually (DELETE /notes/{id}) or all at once (DELETE /notes)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
    )

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, content_length={len(self.content or '')})>"
