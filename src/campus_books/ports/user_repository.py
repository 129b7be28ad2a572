from __future__ import annotations

from abc import ABC, abstractmethod

from campus_books.domain.user import User


class UserRepository(ABC):
    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup by email."""
        ...

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None: ...
