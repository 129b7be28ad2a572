from __future__ import annotations

from campus_books.domain.user import AuthenticatedUser
from campus_books.entrypoints.http.dtos.auth import UserDTO


class AuthMapper:
    @staticmethod
    def to_user_dto(user: AuthenticatedUser) -> UserDTO:
        return UserDTO(
            user_id=user.user_id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )
