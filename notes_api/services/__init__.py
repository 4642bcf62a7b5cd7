"""
Notes API — Services Package
==============================

    - user_service.py:   credential store (register, verify)
    - token_service.py:  bearer token issue/verify
    - note_service.py:   notes CRUD
"""
