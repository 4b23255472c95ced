"""
ProjectHub Backend — Application Package Initializer
=====================================================

What: Marks the `projecthub` directory as a Python package.
Who:  Used by Alembic, pytest, and uvicorn (`uvicorn projecthub.main:app`).

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │  Pagination + HATEOAS link builder  │  ← shared by every list endpoint
    ├─────────────────────────────────────┤
    │       Repositories (Persistence)    │  ← filters, sort, change-sets
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Connection pool)   │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
