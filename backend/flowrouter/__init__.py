"""
FlowRouter Backend - Application Package Initializer
====================================================

What: Marks the `flowrouter` directory as a Python package.
Who:  Used by uvicorn, Alembic, pytest and the `flowrouter` console script.

Architecture Note:
    The backend is a thin layer over FastAPI:

    ┌─────────────────────────────────────┐
    │   Flow Router (catch-all routing)   │  ← one routing() function per app
    ├─────────────────────────────────────┤
    │      Handlers (routes package)      │  ← plain functions / BookHandler
    ├─────────────────────────────────────┤
    │      Repositories (CRUD access)     │  ← async SQLAlchemy sessions
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    FastAPI still parses HTTP and serves /health and /docs; everything else
    goes through `flowrouter.flow.HttpRouter`.
"""

__version__ = "1.0.0"
