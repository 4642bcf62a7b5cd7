"""
Notes API — Application Package
=================================

A CRUD REST API for notes with bearer-token authentication.

Layers:
    ┌─────────────────────────────────────┐
    │     Routes + auth stage (HTTP)      │  ← status codes, headers
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, credentials, tokens
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async engine, scoped sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
