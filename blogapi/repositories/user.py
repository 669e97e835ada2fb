"""User repository for persistence and credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from blogapi.models.user import User
from blogapi.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on safe lookup and password verification.
    It NEVER handles JWT or cookies; only DB-level user management.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def find_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Return the first user whose username OR email matches.

        Either criterion may be omitted; with both omitted nothing matches.

        :param username: Exact username to match.
        :type username: str | None
        :param email: Email to match (normalised to lowercase).
        :type email: str | None
        :returns: Matching user or ``None``.
        :rtype: User | None
        """
        clauses = []
        if username:
            clauses.append(User.username == username.strip())
        if email:
            clauses.append(User.email == email.strip().lower())
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id.asc())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    # ---------------------------- Credentials ----------------------------

    def authenticate(self, identifier: str, password: str) -> User | None:
        """Authenticate by username-or-email and password.

        :param identifier: Value compared against both username and email.
        :type identifier: str
        :param password: Raw password to verify.
        :type password: str
        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.find_by_username_or_email(username=identifier, email=identifier)
        if not user or not user.verify_password(password):
            return None
        return user
