"""
FastAPI dependencies shared by the endpoints.

Tests replace ``get_user_store`` through ``app.dependency_overrides``
to run the API against another store.
"""

from fastapi import Depends

from user_directory.app.repositories.user_store import SQLiteUserStore, UserStore
from user_directory.app.services.user_service import UserService


def get_user_store() -> UserStore:
    return SQLiteUserStore()


def get_user_service(store: UserStore = Depends(get_user_store)) -> UserService:
    return UserService(store)
