from __future__ import annotations

import pytest

from campus_books.domain.user import AuthenticatedUser


@pytest.fixture()
def seller() -> AuthenticatedUser:
    """The logged-in user creating listings."""
    return AuthenticatedUser(
        user_id="00000000-0000-0000-0000-0000000000aa",
        email="priya.shah@campus.edu",
        first_name="Priya",
        last_name="Shah",
    )
