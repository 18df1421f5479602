"""
User CRUD endpoints.

RESTful API for user operations following REST conventions:
- GET /users - List users
- POST /users - Create user
- GET /users/{user_id} - Get user
- PUT /users/{user_id} - Update user
- DELETE /users/{user_id} - Delete user
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from ...schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from ...services.user_service import UserService
from ..deps import get_user_service, verify_api_key


router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(verify_api_key)],
)


def _not_found(user_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User not found: {user_id}"
    )


# READ - List
@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    responses={
        200: {"description": "List of users"},
        401: {"description": "Invalid API key"},
    }
)
async def list_users(
    skip: int = Query(0, ge=0, description="Number of users to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum users to return"),
    search: Optional[str] = Query(None, max_length=100, description="Filter by name or email"),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """
    List registered users ordered by id, with pagination.
    """
    users = await service.list(skip=skip, limit=limit, search=search)
    total = await service.count(search=search)

    return UserListResponse(users=users, total=total, skip=skip, limit=limit)


# CREATE
@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={
        201: {"description": "User created successfully"},
        401: {"description": "Invalid API key"},
        409: {"description": "Email already registered"},
    }
)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Create a new user.

    - **name**: Display name (1-100 chars)
    - **email**: Unique email address
    """
    try:
        return await service.create(user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


# READ - Get
@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by id",
    responses={
        200: {"description": "User details"},
        401: {"description": "Invalid API key"},
        404: {"description": "User not found"},
    }
)
async def get_user(
    user_id: int = Path(..., ge=1),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Get a single user.
    """
    user = await service.get(user_id)

    if user is None:
        raise _not_found(user_id)

    return user


# UPDATE
@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    responses={
        200: {"description": "User updated"},
        401: {"description": "Invalid API key"},
        404: {"description": "User not found"},
        409: {"description": "Email already registered"},
    }
)
async def update_user(
    user_data: UserUpdate,
    user_id: int = Path(..., ge=1),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Update a user's name and/or email.

    Omitted fields keep their current value.
    """
    try:
        user = await service.update(user_id, user_data)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )

    if user is None:
        raise _not_found(user_id)

    return user


# DELETE
@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User deleted"},
        401: {"description": "Invalid API key"},
        404: {"description": "User not found"},
    }
)
async def delete_user(
    user_id: int = Path(..., ge=1),
    service: UserService = Depends(get_user_service),
) -> None:
    """
    Delete a user permanently.
    """
    deleted = await service.delete(user_id)

    if not deleted:
        raise _not_found(user_id)
