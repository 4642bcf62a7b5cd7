"""
Notes API — Note Service (CRUD Business Logic)
================================================

What:  List, get, create, update and delete notes.
How:   Each method issues exactly one SQL statement through the request's
       AsyncSession and returns API schemas, keeping HTTP concerns in the
       routes. Writes commit before returning, so a failed commit surfaces as
       DatabaseError (500) instead of a success response; rollback and close
       stay with the session dependency.
Who:   Called by the notes router after the bearer auth stage has passed.

Error Handling Strategy:
    Missing rows become NotFoundError, empty fields become ValidationError,
    and SQLAlchemy failures are wrapped in DatabaseError so driver details
    never reach the response body.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import DeleteResponse, NoteResponse

logger = logging.getLogger(__name__)


def validate_note_fields(title: str, contents: str) -> None:
    """Raise ValidationError listing every empty or blank field."""
    errors: List[str] = []
    if not title or not title.strip():
        errors.append("title must not be empty")
    if not contents or not contents.strip():
        errors.append("contents must not be empty")
    if errors:
        raise ValidationError(message="; ".join(errors), errors=errors)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: the session is passed per call, so one module-level instance
    serves every request.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """All notes in insertion order (ascending id)."""
        try:
            result = await db.execute(select(Note).order_by(Note.id))
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, title: str, contents: str) -> NoteResponse:
        """
        Persist a new note; id and created_at are assigned on insert.

        Raises:
            ValidationError: title or contents empty (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        validate_note_fields(title, contents)

        note = Note(title=title, contents=contents)
        try:
            db.add(note)
            await db.flush()  # INSERT; assigns id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self, db: AsyncSession, note_id: int, title: str, contents: str
    ) -> NoteResponse:
        """
        Overwrite title and contents; created_at is left untouched.

        Raises:
            ValidationError: title or contents empty (→ 400)
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        validate_note_fields(title, contents)

        try:
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values({Note.title: title, Note.contents: contents})
                .returning(Note)
                .execution_options(synchronize_session=False)
            )
            note = result.scalar_one_or_none()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> DeleteResponse:
        """
        Remove a note.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        try:
            result = await db.execute(
                delete(Note)
                .where(Note.id == note_id)
                .returning(Note.id)
                .execution_options(synchronize_session=False)
            )
            deleted_id = result.scalar_one_or_none()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )

        if deleted_id is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s deleted", note_id)
        return DeleteResponse(message="Note deleted")


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
