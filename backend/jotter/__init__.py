"""
Jotter Backend: Application Package
====================================

What: A small notes service: create, list, fetch and delete text notes over HTTP.
Who:  Imported by uvicorn (`uvicorn jotter.main:app`) and by the test suite.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parse input, map outcome to HTTP
    ├─────────────────────────────────────┤
    │         NoteStore (Persistence)     │  ← one object, one table
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Engine setup)      │  ← async SQLAlchemy over aiosqlite
    └─────────────────────────────────────┘

    The store is constructed once by the application factory, kept on
    `app.state.store`, and handed to each route through a dependency.
"""

__version__ = "1.0.0"
