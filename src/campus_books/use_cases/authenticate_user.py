"""Login and session identity use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from campus_books.domain.errors import UnauthorizedError
from campus_books.domain.user import AuthenticatedUser
from campus_books.infra.security import verify_password
from campus_books.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass(frozen=True, slots=True)
class AuthenticateUserRequest:
    email: str
    password: str


class AuthenticateUser:
    """
    Verify credentials and return the caller's identity.

    Unknown email and wrong password fail with the same error so the
    response does not reveal which accounts exist.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._repository = user_repository

    def execute(self, request: AuthenticateUserRequest) -> AuthenticatedUser:
        """
        Raises:
            UnauthorizedError: If the credentials do not match a user
        """
        user = self._repository.get_by_email(request.email)

        if user is None or not verify_password(request.password, user.password_hash):
            logger.info("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Login succeeded", extra={"user_id": user.id})
        return AuthenticatedUser.from_user(user)


class GetCurrentUser:
    """Resolve the user id stored in a session to an identity."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._repository = user_repository

    def execute(self, user_id: str | None) -> AuthenticatedUser:
        """
        Raises:
            UnauthorizedError: If there is no session or its user is gone
        """
        if not user_id:
            raise UnauthorizedError("Not logged in")

        user = self._repository.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("Not logged in")

        return AuthenticatedUser.from_user(user)
