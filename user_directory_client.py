"""User directory API client.

This module wraps the directory's REST API with the ``requests``
library and provides a small view object for front ends:

* :class:`UserDirectoryClient` exposes :meth:`create_user`,
  :meth:`list_users`, :meth:`delete_user` and :meth:`search_users`.
  Every method returns a ``(data, error)`` tuple; transport and HTTP
  failures are logged and reported through ``error`` instead of being
  raised.
* :class:`DirectoryView` holds what a page shows (the user list, the
  latest search results and a status message) and re-fetches the list
  after every successful create or delete so the display never shows
  stale records.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from user_directory.app.core.exceptions import QueryValidationError
from user_directory.app.services.validation import validate_search_query

logger = logging.getLogger(__name__)

NO_MATCHES_MESSAGE = "No matching users found."

Error = Dict[str, Any]


class UserDirectoryClient:
    """Client for the ``/api/v1/users`` endpoints."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://localhost:3000``.
            api_prefix: Path prefix under which the routers are mounted.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _send(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[requests.Response], Optional[Error]]:
        """Perform an HTTP request and return ``(response, error)``.

        ``error`` is a dictionary with keys ``status_code`` and
        ``message`` when the request failed or returned a non-2xx status.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Like :meth:`_send` but returns the decoded JSON body."""
        response, error = self._send(method, path, params=params, json_body=json_body)
        if error:
            return None, error
        if response.content:
            return response.json(), None
        return None, None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def create_user(self, name: str, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Register a user.

        Returns:
            A tuple ``(result, error)``; ``result`` holds ``message`` and
            ``user``.
        """
        payload = {"name": name, "email": email, "password": password}
        return self._request("POST", "/users/", json_body=payload)

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve every user.  The list is empty on failure."""
        data, error = self._request("GET", "/users/")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def delete_user(self, user_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Delete a user by ID."""
        return self._request("DELETE", f"/users/{user_id}")

    def search_users(self, query: str) -> Tuple[List[Dict[str, Any]], Optional[str], Optional[Error]]:
        """Search users by name or e‑mail substring.

        Returns:
            A tuple ``(results, message, error)``.  ``message`` is set
            when the query was valid but nothing matched.
        """
        response, error = self._send("GET", "/users/search", params={"query": query})
        if error:
            return [], None, error
        results = response.json() if response.content else []
        message = None
        if not results:
            message = response.headers.get("X-Search-Message") or NO_MATCHES_MESSAGE
        return results, message, None


class DirectoryView:
    """Display state for a directory page.

    ``users`` mirrors the server's user list, ``results`` holds the
    latest search hits and ``message`` the latest status text for the
    user (confirmation, validation problem or "no matches").
    """

    def __init__(self, client: UserDirectoryClient) -> None:
        self.client = client
        self.users: List[Dict[str, Any]] = []
        self.results: List[Dict[str, Any]] = []
        self.message: Optional[str] = None
        self.last_error: Optional[Error] = None

    def refresh(self) -> bool:
        users, error = self.client.list_users()
        self.last_error = error
        if error:
            return False
        self.users = users
        return True

    def add_user(self, name: str, email: str, password: str) -> bool:
        """Create a user, then reload the list."""
        data, error = self.client.create_user(name, email, password)
        self.last_error = error
        if error:
            self.message = error["message"] if isinstance(error["message"], str) else "Invalid user data."
            return False
        self.message = data.get("message")
        return self.refresh()

    def remove_user(self, user_id: Any) -> bool:
        """Delete a user, then reload the list."""
        data, error = self.client.delete_user(user_id)
        self.last_error = error
        if error:
            self.message = error["message"] if isinstance(error["message"], str) else "Invalid user id."
            return False
        self.message = data.get("message")
        return self.refresh()

    def search(self, query: Optional[str]) -> bool:
        """Run a search and keep its results.

        Queries the server would reject are caught locally and never
        sent; ``message`` then explains the problem.
        """
        self.results = []
        try:
            cleaned = validate_search_query(query)
        except QueryValidationError as e:
            self.message = e.message
            return False
        results, message, error = self.client.search_users(cleaned)
        self.last_error = error
        if error:
            self.message = error["message"]
            return False
        self.results = results
        self.message = message
        return True

    def user_lines(self) -> List[str]:
        return [f"{user['name']} ({user['email']})" for user in self.users]

    def result_lines(self) -> List[str]:
        return [f"Name: {hit['name']}, Email: {hit['email']}" for hit in self.results]
