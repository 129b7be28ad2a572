"""PostgreSQL implementation of UserRepository."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_books.domain.errors import PersistenceError
from campus_books.domain.user import User
from campus_books.infra.db.models.user import UserRow
from campus_books.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


class PostgresUserRepository(UserRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_email(self, email: str) -> User | None:
        query = select(UserRow).where(func.lower(UserRow.email) == email.strip().lower())
        return self._fetch_one(query)

    def get_by_id(self, user_id: str) -> User | None:
        try:
            key = uuid.UUID(user_id)
        except ValueError:
            return None
        return self._fetch_one(select(UserRow).where(UserRow.id == key))

    def _fetch_one(self, query) -> User | None:  # type: ignore[no-untyped-def]
        try:
            row = self._session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("User lookup failed", exc_info=exc)
            raise PersistenceError("Failed to load user") from exc

        return self._to_domain(row) if row else None

    def _to_domain(self, row: UserRow) -> User:
        return User(
            id=str(row.id),
            email=row.email,
            first_name=row.first_name,
            last_name=row.last_name,
            role=row.role,
            password_hash=row.password_hash,
        )
