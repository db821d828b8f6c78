"""
Business logic for users.

``UserService`` implements the four directory operations on top of a
``UserStore``.  Passwords are stored exactly as submitted; this service
does not hash them and never returns them.
"""

import logging
from typing import List, Optional

from ..core.exceptions import UserNotFoundError
from ..repositories.user_store import UserStore
from ..schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreated,
    UserRead,
    UserSearchResult,
    UserSummary,
)
from .search_service import search_users
from .validation import validate_search_query

logger = logging.getLogger(__name__)

USER_CREATED_MESSAGE = "User created successfully"
USER_DELETED_MESSAGE = "User deleted successfully"


class UserService:
    """Create, list, delete and search users.

    Store failures propagate as ``StoreError``; the application turns
    them into a generic 500 response.
    """

    def __init__(self, store: UserStore) -> None:
        self.store = store

    async def create_user(self, data: UserCreate) -> UserCreated:
        """Persist a new user and return it with its assigned id.

        No uniqueness or format checks are applied to ``email``.
        """
        user_id = self.store.create(
            {"name": data.name, "email": data.email, "password": data.password}
        )
        logger.info("Created user %s", user_id)
        return UserCreated(
            message=USER_CREATED_MESSAGE,
            user=UserSummary(id=user_id, name=data.name, email=data.email),
        )

    async def list_users(self) -> List[UserRead]:
        """Return all users in store order."""
        rows = self.store.list_all()
        return [
            UserRead(id=row["id"], name=row["name"], email=row["email"], created_at=row.get("created_at"))
            for row in rows
        ]

    async def delete_user(self, user_id: int) -> MessageResponse:
        """Hard-delete a user.

        Raises ``UserNotFoundError`` if no user has ``user_id``; other
        records are never touched.
        """
        if not self.store.delete_by_id(user_id):
            logger.warning("User %s not found for deletion", user_id)
            raise UserNotFoundError(user_id)
        logger.info("Deleted user %s", user_id)
        return MessageResponse(message=USER_DELETED_MESSAGE)

    async def search_users(self, query: Optional[str]) -> List[UserSearchResult]:
        """Validate ``query`` and return matching users as ``{name, email}``.

        Validation happens before the store is touched, so an invalid
        query never reaches persistence.
        """
        cleaned = validate_search_query(query)
        return search_users(self.store, cleaned)
