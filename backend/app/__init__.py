"""
Inkwell Backend — Application Package Initializer
===================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Business Logic)         │  ← check order, existence guards
    ├─────────────────────────────────────┤
    │   Persistence Gateway               │  ← fetch_all / fetch_one / execute
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Session per request)    │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
