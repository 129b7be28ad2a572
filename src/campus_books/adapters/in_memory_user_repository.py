from __future__ import annotations

from campus_books.domain.user import User
from campus_books.ports.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Contract implementation for tests."""

    def __init__(self, users: list[User] | None = None) -> None:
        self._users = list(users or [])

    def get_by_email(self, email: str) -> User | None:
        wanted = email.strip().lower()
        return next((user for user in self._users if user.email.lower() == wanted), None)

    def get_by_id(self, user_id: str) -> User | None:
        return next((user for user in self._users if user.id == user_id), None)
