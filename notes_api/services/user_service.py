"""
Notes API — User Service (Credential Store)
=============================================

What:  Registers users and verifies their credentials.
How:   passlib's CryptContext hashes passwords with bcrypt at a fixed cost
       factor from settings. Each call issues one SQL statement; duplicate
       usernames are detected through the table's unique constraint.
Who:   Called by the users router; one instance lives on `app.state`.
"""

import logging
from typing import List, Optional

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import Settings
from notes_api.exceptions import (
    DatabaseError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    ValidationError,
)
from notes_api.models.user import User

logger = logging.getLogger(__name__)


def build_password_context(rounds: int = 10) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
    errors: List[str] = []
    if not username or not username.strip():
        errors.append("username must not be empty")
    if not password:
        errors.append("password must not be empty")
    if errors:
        raise ValidationError(message="; ".join(errors), errors=errors)


class UserService:
    """
    Credential store over the `users` table.

    Responsibilities:
        - register(): hash and persist a new user
        - verify(): check a username/password pair, returning the user id
    """

    def __init__(self, pwd_context: Optional[CryptContext] = None):
        self.pwd_context = pwd_context or build_password_context()

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserService":
        return cls(build_password_context(settings.bcrypt_rounds))

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    async def register(self, db: AsyncSession, username: str, password: str) -> int:
        """
        Create a user and return its generated id.

        Raises:
            ValidationError: empty username or password (→ 400)
            DuplicateUsernameError: username already registered (→ 400)
            DatabaseError: unexpected storage failure (→ 500)
        """
        _require_credentials(username, password)
        password_hash = self.hash_password(password)

        user = User(username=username, password_hash=password_hash)
        try:
            db.add(user)
            await db.flush()  # INSERT; assigns the generated id
            await db.commit()
        except IntegrityError:
            logger.info("Registration rejected: username '%s' already exists", username)
            raise DuplicateUsernameError(username)
        except SQLAlchemyError as e:
            logger.error("Database error registering user '%s': %s", username, str(e))
            raise DatabaseError(
                message="Could not register the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Registered user %s (%s)", user.id, username)
        return user.id

    async def verify(self, db: AsyncSession, username: str, password: str) -> int:
        """
        Check credentials and return the user id.

        An unknown username still runs a dummy hash verification so that both
        failure paths take comparable time.

        Raises:
            ValidationError: empty username or password (→ 400)
            InvalidCredentialsError: unknown user or wrong password (→ 401)
            DatabaseError: unexpected storage failure (→ 500)
        """
        _require_credentials(username, password)

        try:
            result = await db.execute(
                select(User.id, User.password_hash).where(User.username == username)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user '%s': %s", username, str(e))
            raise DatabaseError(
                message="Could not verify credentials. Please try again.",
                context={"error_type": type(e).__name__},
            )

        if row is None:
            self.pwd_context.dummy_verify()
            raise InvalidCredentialsError(context={"username": username, "detail": "unknown user"})

        user_id, password_hash = row
        if not self.pwd_context.verify(password, password_hash):
            raise InvalidCredentialsError(context={"username": username, "detail": "wrong password"})

        return user_id
