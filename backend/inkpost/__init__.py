"""
Inkpost Backend — Application Package Initializer
===================================================

What: Marks the `inkpost` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Auth dependencies (request gates) │  ← token, blog attachment, author
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, slugs, tokens
    ├─────────────────────────────────────┤
    │            Stores (Persistence)     │  ← queries, constraint translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
