"""User repository: lookups and inserts for the user store."""

from __future__ import annotations

from sqlalchemy import select

from authcore.models.user import User
from authcore.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Never hashes or verifies passwords and never issues tokens.
    """

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by exact email match (no case folding).

        :param email: Email exactly as stored.
        :returns: User instance or ``None`` when not found.
        """
        return self._first(select(User).where(User.email == email))
