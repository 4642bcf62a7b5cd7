"""
Notes API — Middleware Package
================================

Application-wide stages (Starlette middleware, outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Router

Per-router stages (FastAPI dependencies):
    /api/notes/*  → [Bearer auth] → handler
    /api/users/*  → handler
"""
