"""Tests for the ``requests`` based client and its view state.

Requests are routed in-process to the FastAPI app through
``TestClient`` and converted back into ``requests.Response`` objects.
"""

import pytest
import requests
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from user_directory.app.main import app
from user_directory_client import DirectoryView, UserDirectoryClient


class _AppSession:
    """Stand-in for ``requests.Session`` that talks to the ASGI app."""

    def __init__(self) -> None:
        self.test_client = TestClient(app)
        self.calls = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append((method, url))
        r = self.test_client.request(method, url, params=params, json=json)
        response = requests.Response()
        response.status_code = r.status_code
        response._content = r.content
        response.headers = CaseInsensitiveDict(r.headers)
        response.url = str(r.url)
        return response


class _DownSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def session(database) -> _AppSession:
    return _AppSession()


@pytest.fixture
def api(session) -> UserDirectoryClient:
    return UserDirectoryClient(base_url="http://testserver", session=session)


def test_create_and_list(api) -> None:
    data, error = api.create_user("Anna", "a@x.com", "pw")
    assert error is None
    assert data["message"] == "User created successfully"
    users, error = api.list_users()
    assert error is None
    assert [u["name"] for u in users] == ["Anna"]


def test_delete_missing_user_reports_404(api) -> None:
    data, error = api.delete_user(999)
    assert data is None
    assert error == {"status_code": 404, "message": "User not found"}


def test_search_reports_no_matches(api) -> None:
    api.create_user("Anna", "a@x.com", "pw")
    results, message, error = api.search_users("zzz")
    assert (results, message, error) == ([], "No matching users found.", None)


def test_transport_failure_is_returned_not_raised() -> None:
    api = UserDirectoryClient(base_url="http://nowhere", session=_DownSession())
    users, error = api.list_users()
    assert users == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_view_refreshes_after_add_and_remove(api) -> None:
    view = DirectoryView(api)
    assert view.add_user("Anna", "a@x.com", "pw")
    assert view.message == "User created successfully"
    assert view.user_lines() == ["Anna (a@x.com)"]

    assert view.add_user("Bob", "b@x.com", "pw")
    anna_id = view.users[0]["id"]
    assert view.remove_user(anna_id)
    assert view.message == "User deleted successfully"
    assert view.user_lines() == ["Bob (b@x.com)"]


def test_view_remove_twice_keeps_list(api) -> None:
    view = DirectoryView(api)
    view.add_user("Anna", "a@x.com", "pw")
    view.add_user("Bob", "b@x.com", "pw")
    anna_id = view.users[0]["id"]
    assert view.remove_user(anna_id)
    assert not view.remove_user(anna_id)
    assert view.message == "User not found"
    assert view.user_lines() == ["Bob (b@x.com)"]


def test_view_remove_with_malformed_id_keeps_text_message(api) -> None:
    view = DirectoryView(api)
    view.add_user("Anna", "a@x.com", "pw")
    assert not view.remove_user("abc")
    assert view.last_error["status_code"] == 400
    assert view.message == "Invalid user id."
    assert view.user_lines() == ["Anna (a@x.com)"]


def test_view_search_results_and_messages(api) -> None:
    view = DirectoryView(api)
    view.add_user("Anna", "a@x.com", "pw")
    view.add_user("Bob", "b@x.com", "pw")

    assert view.search("ann")
    assert view.result_lines() == ["Name: Anna, Email: a@x.com"]
    assert view.message is None

    assert view.search("nobody")
    assert view.results == []
    assert view.message == "No matching users found."


def test_view_does_not_send_invalid_queries(api, session) -> None:
    view = DirectoryView(api)
    assert not view.search("")
    assert view.message == "Search content not entered."
    assert not view.search("!?")
    assert view.message == "Search query contains only symbols."
    assert session.calls == []
