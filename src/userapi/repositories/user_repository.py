"""
User repository backed by the SQLAlchemy async ORM.
"""

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from ..core.logging import get_logger
from ..models.user import User, utcnow
from .base import Repository


logger = get_logger(__name__)


class UserRepository(Repository[User, int]):
    """
    Repository for User rows.

    Each instance works on one session; every mutation commits.
    """

    # Fields callers may never overwrite
    READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, session: AsyncSession):
        """
        Initialize the user repository.

        Args:
            session: Session scoped to the current unit of work
        """
        self._session = session

    async def _commit(self, email: Optional[str] = None) -> None:
        """Commit, translating unique violations into ValueError."""
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning("Integrity error on commit", email=email, error=str(e.orig))
            raise ValueError(f"Email already registered: {email}") from e

    @staticmethod
    def _apply_search(stmt: Select, search: Optional[str]) -> Select:
        # autoescape keeps % and _ in the term literal
        term = search.strip() if search else ""
        if term:
            stmt = stmt.where(or_(
                User.name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
            ))
        return stmt

    # CRUD Operations

    async def create(self, entity: User) -> User:
        """Insert a new user."""
        self._session.add(entity)
        await self._commit(entity.email)
        await self._session.refresh(entity)
        logger.info("Created user", user_id=entity.id)
        return entity

    async def get(self, id: int) -> Optional[User]:
        """Get a user by primary key."""
        return await self._session.get(User, id)

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None
    ) -> list[User]:
        """List users ordered by id, optionally filtered by name/email."""
        stmt = self._apply_search(select(User), search)
        stmt = stmt.order_by(User.id).offset(skip).limit(limit)
        result = await self._session.scalars(stmt)
        return list(result.all())

    async def update(self, id: int, data: dict) -> Optional[User]:
        """Update a user's fields (None values are ignored)."""
        user = await self._session.get(User, id)
        if user is None:
            return None

        changed = []
        for key, value in data.items():
            if key in self.READ_ONLY_FIELDS or value is None:
                continue
            if not hasattr(user, key):
                raise ValueError(f"Unknown field: {key}")
            setattr(user, key, value)
            changed.append(key)

        if changed:
            user.updated_at = utcnow()
            await self._commit(user.email)
            await self._session.refresh(user)
            logger.info("Updated user", user_id=id, fields=changed)

        return user

    async def delete(self, id: int) -> bool:
        """Delete a user."""
        user = await self._session.get(User, id)
        if user is None:
            return False

        await self._session.delete(user)
        await self._session.commit()
        logger.info("Deleted user", user_id=id)
        return True

    async def count(self, search: Optional[str] = None) -> int:
        """Count users, optionally filtered by name/email."""
        stmt = self._apply_search(select(func.count()).select_from(User), search)
        return (await self._session.scalar(stmt)) or 0

    async def exists(self, id: int) -> bool:
        """Check if a user exists."""
        stmt = select(User.id).where(User.id == id)
        return (await self._session.scalar(stmt)) is not None

    # Additional user-specific methods

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.strip().lower())
        return await self._session.scalar(stmt)
