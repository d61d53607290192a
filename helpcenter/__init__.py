"""
Help Center Backend — Application Package
==========================================

What: JSON API for the help-article / incident-report site plus Google and
      GitHub login.
Who:  Imported by uvicorn (`helpcenter.main:app`), Alembic and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │      Routes (auth, users, ...)      │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   Services (identity, session, ...) │  ← business rules
    ├─────────────────────────────────────┤
    │    Models (ORM) & Schemas (API)     │
    ├─────────────────────────────────────┤
    │    Database (scoped AsyncSession)   │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
