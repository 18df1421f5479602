"""
User service implementing business logic for user management.

This service layer sits between the API/CLI and the repository,
providing validation, business rules, and transformation logic.
"""

from typing import Optional

from ..core.logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.user import UserCreate, UserResponse, UserUpdate


logger = get_logger(__name__)


class UserService:
    """
    Service for user management operations.

    Implements CRUD operations with business logic:
    - Create: Enforce unique email, persist user
    - Read: Get user(s) with optional search
    - Update: Partial update with email uniqueness check
    - Delete: Remove user
    """

    def __init__(self, repository: UserRepository):
        """
        Initialize the user service.

        Args:
            repository: User repository for data access
        """
        self._repo = repository

    # CREATE

    async def create(self, data: UserCreate) -> UserResponse:
        """
        Create a new user.

        Args:
            data: User creation data (validated by schema)

        Returns:
            Created user response

        Raises:
            ValueError: If the email is already registered
        """
        if await self._repo.get_by_email(data.email) is not None:
            raise ValueError(f"Email already registered: {data.email.lower()}")

        created = await self._repo.create(User(name=data.name, email=data.email))
        return self._to_response(created)

    # READ

    async def get(self, user_id: int) -> Optional[UserResponse]:
        """
        Get a user by id.

        Returns:
            User response if found, None otherwise
        """
        user = await self._repo.get(user_id)
        if user is None:
            return None
        return self._to_response(user)

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        search: Optional[str] = None
    ) -> list[UserResponse]:
        """
        List users ordered by id.

        Args:
            skip: Number of users to skip
            limit: Maximum users to return
            search: Case-insensitive substring of name or email
        """
        users = await self._repo.list(skip=skip, limit=limit, search=search)
        return [self._to_response(u) for u in users]

    async def count(self, search: Optional[str] = None) -> int:
        """Get total number of (matching) users."""
        return await self._repo.count(search=search)

    # UPDATE

    async def update(self, user_id: int, data: UserUpdate) -> Optional[UserResponse]:
        """
        Update a user's properties.

        Args:
            user_id: The user to update
            data: Partial update data

        Returns:
            Updated user response if found, None otherwise

        Raises:
            ValueError: If the new email belongs to another user
        """
        if not await self._repo.exists(user_id):
            return None

        update_data = data.model_dump(exclude_none=True)

        if 'email' in update_data:
            owner = await self._repo.get_by_email(update_data['email'])
            if owner is not None and owner.id != user_id:
                raise ValueError(f"Email already registered: {update_data['email'].lower()}")

        updated = await self._repo.update(user_id, update_data)
        if updated is None:
            return None
        return self._to_response(updated)

    # DELETE

    async def delete(self, user_id: int) -> bool:
        """
        Delete a user.

        Returns:
            True if deleted, False if not found
        """
        deleted = await self._repo.delete(user_id)
        if not deleted:
            logger.debug("Delete requested for unknown user", user_id=user_id)
        return deleted

    # HELPERS

    def _to_response(self, user: User) -> UserResponse:
        """Convert an ORM entity to the response schema."""
        return UserResponse.model_validate(user)
