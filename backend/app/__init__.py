"""
Glee Threads Backend — Application Package
============================================

What: The storefront API package (catalogue, checkout, admin, uploads).
Who:  Imported by uvicorn (`app.main:app`), Alembic, pytest and the admin scripts.

Layering:

    ┌─────────────────────────────────────┐
    │   Routes (HTTP) + dependencies.py   │  ← status codes, auth gate
    ├─────────────────────────────────────┤
    │          Services (logic)           │  ← validation, queries
    ├─────────────────────────────────────┤
    │   Models (SQLAlchemy) / Schemas     │  ← tables and API contracts
    ├─────────────────────────────────────┤
    │        Database (sessions)          │  ← async engine + pool
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
