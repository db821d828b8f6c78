"""Tests for ``UserService`` against the in-memory store."""

import pytest

from user_directory.app.core.exceptions import (
    EmptyQueryError,
    SymbolOnlyQueryError,
    UserNotFoundError,
)
from user_directory.app.schemas.user import UserCreate
from user_directory.app.services.user_service import UserService


class _CountingStore:
    """Wraps a store and records which methods were called."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.calls = []

    def __getattr__(self, name):
        self.calls.append(name)
        return getattr(self.inner, name)


@pytest.fixture
def service(memory_store) -> UserService:
    return UserService(memory_store)


async def test_create_then_list_contains_new_user(service) -> None:
    before = {u.id for u in await service.list_users()}
    created = await service.create_user(UserCreate(name="Anna", email="a@x.com", password="pw"))
    assert created.message == "User created successfully"
    assert created.user.id not in before
    listed = await service.list_users()
    assert [(u.id, u.name, u.email) for u in listed] == [(created.user.id, "Anna", "a@x.com")]


async def test_delete_removes_user(service) -> None:
    anna = await service.create_user(UserCreate(name="Anna", email="a@x.com", password="pw"))
    bob = await service.create_user(UserCreate(name="Bob", email="b@x.com", password="pw"))
    result = await service.delete_user(anna.user.id)
    assert result.message == "User deleted successfully"
    assert [u.id for u in await service.list_users()] == [bob.user.id]


async def test_second_delete_raises_not_found_and_keeps_others(service) -> None:
    anna = await service.create_user(UserCreate(name="Anna", email="a@x.com", password="pw"))
    bob = await service.create_user(UserCreate(name="Bob", email="b@x.com", password="pw"))
    await service.delete_user(anna.user.id)
    with pytest.raises(UserNotFoundError):
        await service.delete_user(anna.user.id)
    assert [u.id for u in await service.list_users()] == [bob.user.id]


async def test_search_validates_before_touching_store(memory_store) -> None:
    store = _CountingStore(memory_store)
    service = UserService(store)
    with pytest.raises(EmptyQueryError):
        await service.search_users("")
    with pytest.raises(SymbolOnlyQueryError):
        await service.search_users("!!")
    assert store.calls == []


async def test_search_trims_query(service) -> None:
    await service.create_user(UserCreate(name="Anna", email="a@x.com", password="pw"))
    results = await service.search_users("  ann  ")
    assert [r.name for r in results] == ["Anna"]
