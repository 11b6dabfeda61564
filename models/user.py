"""User model definition."""

from datetime import UTC, datetime

from . import db


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(db.Model):
    """Represents a registered account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=_utcnow,
        server_default=db.func.now(),
    )
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=db.func.now(),
    )

    def to_safe_dict(self) -> dict:
        """Serialize the user without the password hash."""

        return {
            "id": self.id,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
