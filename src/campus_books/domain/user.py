from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    id: str
    email: str
    first_name: str
    last_name: str
    role: str = "student"
    password_hash: str = field(default="", repr=False)


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """
    Identity of the caller, resolved from the session.

    Passed explicitly into every use case that acts on behalf of a user.
    """

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str = "student"

    @classmethod
    def from_user(cls, user: User) -> AuthenticatedUser:
        return cls(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
        )
