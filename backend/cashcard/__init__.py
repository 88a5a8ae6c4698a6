"""
Cash Card API: Application Package Initializer
==============================================

What: Marks the `cashcard` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn cashcard.main:app`) and by pytest.

Architecture Note:
    The service is a thin layered stack:

    ┌─────────────────────────────────────┐
    │       Routes (Transport Handler)    │  ← path parsing, status codes
    ├─────────────────────────────────────┤
    │     Services (Lookup Repository)    │  ← find_by_id -> card or None
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘

    Each layer receives the one below it explicitly; `main.create_app()`
    is the only place where the pieces are assembled.
"""

__version__ = "1.0.0"
