"""
Notes API — User SQLAlchemy Model
===================================

Table layout: users(id, username, password)
    - username: unique; the unique constraint is what rejects duplicates
    - password: the bcrypt hash, never the plaintext
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

USERNAME_MAX_LENGTH = 150


class User(Base):
    """A registered account. Never deleted; only the hash is stored."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), nullable=False, unique=True)

    password_hash: Mapped[str] = mapped_column("password", String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
