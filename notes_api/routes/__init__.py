"""
Notes API — Routes Package
============================

Route Inventory:
    - users.py:   POST /api/users/register, POST /api/users/login
    - notes.py:   GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}  (bearer auth)
    - health.py:  GET  /health

Routes stay thin: they read the request, call a service and pick the
status code. Business rules live in services.
"""
