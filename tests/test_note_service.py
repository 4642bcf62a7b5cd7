"""
Notes API — Note Service Tests
================================

What:  NoteService CRUD behavior.
How:   Error paths use mock DB sessions; the create/get/update/delete
       contract runs against a real SQLite database, one session per call.

What we test:
    ✅ create then get returns identical title/contents and a timestamp
    ✅ absent ids → NotFoundError for get, update and delete
    ✅ update overwrites fields but keeps created_at
    ✅ list returns insertion order
    ✅ empty fields → ValidationError before any SQL
    ✅ SQLAlchemy failures (including commit) are wrapped in DatabaseError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from notes_api.exceptions import DatabaseError, NotFoundError, ValidationError
from notes_api.services.note_service import NoteService


class TestNoteServiceWithDatabase:
    """Contract tests against SQLite."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title, contents",
        [
            ("T", "C"),
            ("Groceries", "milk\neggs\nbread"),
            ("Unicode ✓", "naïve café"),
        ],
    )
    async def test_create_then_get(self, database, title, contents):
        async with database.session() as db:
            created = await self.service.create_note(db, title=title, contents=contents)
        async with database.session() as db:
            fetched = await self.service.get_note(db, created.id)

        assert fetched.id == created.id
        assert fetched.title == title
        assert fetched.contents == contents
        assert fetched.created_at is not None

    @pytest.mark.asyncio
    async def test_absent_ids_are_not_found(self, database):
        async with database.session() as db:
            with pytest.raises(NotFoundError):
                await self.service.get_note(db, 999)
            with pytest.raises(NotFoundError):
                await self.service.update_note(db, 999, title="T", contents="C")
            with pytest.raises(NotFoundError):
                await self.service.delete_note(db, 999)

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, database):
        async with database.session() as db:
            created = await self.service.create_note(db, title="Old", contents="old body")
        async with database.session() as db:
            before = await self.service.get_note(db, created.id)
        async with database.session() as db:
            updated = await self.service.update_note(
                db, created.id, title="New", contents="new body"
            )

        assert updated.id == created.id
        assert updated.title == "New"
        assert updated.contents == "new body"
        assert updated.created_at == before.created_at

    @pytest.mark.asyncio
    async def test_delete_removes_note(self, database):
        async with database.session() as db:
            created = await self.service.create_note(db, title="T", contents="C")
        async with database.session() as db:
            ack = await self.service.delete_note(db, created.id)

        assert ack.message == "Note deleted"
        async with database.session() as db:
            with pytest.raises(NotFoundError):
                await self.service.get_note(db, created.id)

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, database):
        async with database.session() as db:
            assert await self.service.list_notes(db) == []

        for title in ("first", "second", "third"):
            async with database.session() as db:
                await self.service.create_note(db, title=title, contents="body")

        async with database.session() as db:
            notes = await self.service.list_notes(db)

        assert [n.title for n in notes] == ["first", "second", "third"]
        assert [n.id for n in notes] == [1, 2, 3]


class TestNoteServiceValidation:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title, contents, expected",
        [
            ("", "C", ["title must not be empty"]),
            ("T", "", ["contents must not be empty"]),
            ("   ", "\n", ["title must not be empty", "contents must not be empty"]),
        ],
    )
    async def test_create_rejects_empty_fields(self, mock_db_session, title, contents, expected):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_note(mock_db_session, title=title, contents=contents)

        assert exc_info.value.errors == expected
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_rejects_empty_fields(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.update_note(mock_db_session, 1, title="", contents="C")
        mock_db_session.execute.assert_not_awaited()


class TestNoteServiceGet:
    """Tests for get_note with a mocked session."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session):
        mock_note = MagicMock()
        mock_note.id = 1
        mock_note.title = "T"
        mock_note.contents = "C"
        mock_note.created_at = datetime.now(timezone.utc)

        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = mock_note
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_note(mock_db_session, 1)

        assert result.id == 1
        assert result.title == "T"
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, 42)
        assert exc_info.value.message == "Note with ID '42' was not found"


class TestNoteServiceDatabaseErrors:

    def setup_method(self):
        self.service = NoteService()

    @staticmethod
    def _failing(session):
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("connection lost"))
        )
        return session

    @pytest.mark.asyncio
    async def test_list_wraps_sqlalchemy_error(self, mock_db_session):
        with pytest.raises(DatabaseError):
            await self.service.list_notes(self._failing(mock_db_session))

    @pytest.mark.asyncio
    async def test_delete_wraps_sqlalchemy_error(self, mock_db_session):
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.delete_note(self._failing(mock_db_session), 3)
        assert "connection lost" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_wraps_flush_error(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, title="T", contents="C")

    @pytest.mark.asyncio
    async def test_create_wraps_commit_error(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("serialization failure"))
        )
        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, title="T", contents="C")

    @pytest.mark.asyncio
    async def test_update_commits_before_returning(self, mock_db_session):
        note = MagicMock()
        note.id = 1
        note.title = "T2"
        note.contents = "C2"
        note.created_at = datetime.now(timezone.utc)

        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = note
        mock_db_session.execute.return_value = mock_result

        await self.service.update_note(mock_db_session, 1, title="T2", contents="C2")

        mock_db_session.commit.assert_awaited_once()
