"""
School Survey — Package Initializer
=====================================

Collects school-environment questionnaires from guardians, teachers and
students and offers a school-name autocomplete.

Layers:

    ┌─────────────────────────────────────┐
    │     Routes (API) / Client (forms)   │  ← HTTP concerns, form state
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← inserts, search, DDL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← engine on app.state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
