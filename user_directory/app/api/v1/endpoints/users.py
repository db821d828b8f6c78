"""
User endpoints for API v1.

Provide registration, listing, deletion and substring search of
users.  Passwords are stored as submitted and never returned; there is
no update endpoint.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from user_directory.app.api.deps import get_user_service
from user_directory.app.core.exceptions import QueryValidationError, UserNotFoundError
from user_directory.app.schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreated,
    UserRead,
    UserSearchResult,
)
from user_directory.app.services.user_service import UserService

NO_MATCHES_MESSAGE = "No matching users found."
SEARCH_MESSAGE_HEADER = "X-Search-Message"

router = APIRouter()


@router.post("/", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserCreated:
    """Register a new user and return it with a confirmation message.

    ``name``, ``email`` and ``password`` are all required.  E‑mail
    addresses are neither checked for format nor for uniqueness.
    """
    return await service.create_user(user)


@router.get("/", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return every user.  Order is whatever the store returns."""
    return await service.list_users()


@router.get("/search", response_model=List[UserSearchResult])
async def search_users(
    response: Response,
    query: Optional[str] = Query(None, description="Text to look for in name or email"),
    service: UserService = Depends(get_user_service),
) -> List[UserSearchResult]:
    """Search users by name or e‑mail substring, ignoring case.

    A missing, blank or symbol‑only query is rejected with HTTP 400.  A
    valid query without matches returns an empty list together with an
    ``X-Search-Message`` header explaining that nothing was found.
    """
    try:
        results = await service.search_users(query)
    except QueryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if not results:
        response.headers[SEARCH_MESSAGE_HEADER] = NO_MATCHES_MESSAGE
    return results


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user_endpoint(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Delete a user by ID.

    Returns HTTP 404 if the user does not exist, including when the
    same ID is deleted a second time.
    """
    try:
        return await service.delete_user(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
