"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations; created by Database.create_all.

Table layout: notes(id, title, contents, created)
    - id: integer primary key, generated by the database
    - title / contents: NOT NULL text; emptiness is rejected before insert
    - created: UTC timestamp assigned once on insert, never updated
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

TITLE_MAX_LENGTH = 255


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A note. Any authenticated caller may read, update or delete it.

    Query Patterns:
        - List: SELECT ... ORDER BY id (insertion order)
        - Get / update / delete: WHERE id = :id (primary key)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)

    contents: Mapped[str] = mapped_column(Text, nullable=False)

    # Attribute `created_at`, column `created`
    created_at: Mapped[datetime] = mapped_column(
        "created",
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
