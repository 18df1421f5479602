"""
User entity mapped with the SQLAlchemy ORM.
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from ..db.base import Base
from ..db.types import UTCDateTime


NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """A registered user: a name and a unique email address."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    @validates("email")
    def normalize_email(self, key: str, value: str) -> str:
        """Emails are compared case-insensitively, so store them lower-cased."""
        return value.strip().lower()

    @validates("name")
    def normalize_name(self, key: str, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be empty")
        return value

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
