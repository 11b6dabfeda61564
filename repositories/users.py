"""Store operations for the ``users`` table."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, scoped_session

from errors import DuplicateEmailError
from models.user import User


class UserRepository:
    """Repository for user rows.

    Every mutating method issues exactly one commit. A unique index violation
    rolls the session back and raises ``DuplicateEmailError``.
    """

    def __init__(self, session: Session | scoped_session) -> None:
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEmailError(str(exc.orig)) from exc

    def create(self, email: str, password_hash: str) -> User:
        user = User(email=email, password_hash=password_hash)
        self.session.add(user)
        self._commit()
        return user

    def get(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup."""

        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.session.scalars(stmt).first()

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def update(self, user: User, **fields) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        self._commit()
        return user

    def update_password(self, user: User, password_hash: str) -> User:
        return self.update(user, password_hash=password_hash)

    def delete(self, user: User) -> User:
        self.session.delete(user)
        self._commit()
        return user

    def paginate(
        self, skip: int, limit: int, email_filter: str | None = None
    ) -> tuple[list[User], int]:
        """Return ``limit`` users after ``skip``, newest first, and the filtered total."""

        conditions = []
        if email_filter:
            conditions.append(User.email.icontains(email_filter, autoescape=True))

        total = self.session.scalar(
            select(func.count()).select_from(User).where(*conditions)
        )
        total = int(total or 0)
        # Past the last row; also keeps oversized offsets away from the driver.
        if skip >= total:
            return [], total

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(self.session.scalars(stmt)), total
