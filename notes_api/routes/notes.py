"""
Notes API — Notes Route Handlers
==================================

What:  CRUD endpoints under /api/notes.
How:   Every route on this router runs the bearer auth stage first (router
       dependency), then delegates to NoteService with a request-scoped
       session.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.database import get_db_session
from notes_api.middleware.auth import require_user
from notes_api.schemas.common import ErrorResponse, ValidationErrorResponse
from notes_api.schemas.note import DeleteResponse, NoteRequest, NoteResponse
from notes_api.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/notes",
    tags=["Notes"],
    dependencies=[Depends(require_user)],
    responses={401: {"description": "Missing, invalid or expired token", "model": ErrorResponse}},
)

_not_found = {404: {"description": "Note not found", "model": ErrorResponse}}
_invalid = {400: {"description": "Missing or empty fields", "model": ValidationErrorResponse}}


@router.get("", response_model=List[NoteResponse], summary="List all notes")
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    """Returns every note in insertion order."""
    return await note_service.list_notes(db)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=_not_found,
    summary="Get a single note by ID",
)
async def get_note(note_id: int, db: AsyncSession = Depends(get_db_session)) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_invalid,
    summary="Create a note",
)
async def create_note(
    body: NoteRequest, db: AsyncSession = Depends(get_db_session)
) -> NoteResponse:
    return await note_service.create_note(db, title=body.title, contents=body.contents)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_invalid, **_not_found},
    summary="Replace a note's title and contents",
)
async def update_note(
    note_id: int, body: NoteRequest, db: AsyncSession = Depends(get_db_session)
) -> NoteResponse:
    return await note_service.update_note(
        db, note_id, title=body.title, contents=body.contents
    )


@router.delete(
    "/{note_id}",
    response_model=DeleteResponse,
    responses=_not_found,
    summary="Delete a note",
)
async def delete_note(note_id: int, db: AsyncSession = Depends(get_db_session)) -> DeleteResponse:
    return await note_service.delete_note(db, note_id)
