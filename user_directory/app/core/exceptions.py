"""
Domain exceptions for the directory service.

Services raise these; the API layer maps them to HTTP responses.
Each exception carries a human-readable ``message``, a machine
readable ``error_code`` and an optional ``details`` dict.
"""

from typing import Any, Dict, Optional


class DirectoryError(Exception):
    """Base exception for all directory errors."""

    status_code = 400

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error_code, "message": self.message, "details": self.details}


class QueryValidationError(DirectoryError):
    """Raised when a search query is rejected before reaching the store."""

    def __init__(self, message: str, query: Optional[str] = None) -> None:
        details = {"query": query} if query is not None else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class EmptyQueryError(QueryValidationError):
    """The search query is missing, empty or only whitespace."""

    def __init__(self, query: Optional[str] = None) -> None:
        super().__init__("Search content not entered.", query)


class SymbolOnlyQueryError(QueryValidationError):
    """The search query consists solely of punctuation or symbols."""

    def __init__(self, query: Optional[str] = None) -> None:
        super().__init__("Search query contains only symbols.", query)


class UserNotFoundError(DirectoryError):
    """No user exists with the requested id."""

    status_code = 404

    def __init__(self, user_id: int) -> None:
        super().__init__("User not found", "RESOURCE_NOT_FOUND", {"user_id": user_id})
        self.user_id = user_id


class StoreError(DirectoryError):
    """The underlying record store failed."""

    status_code = 500

    def __init__(self, message: str = "Record store failure") -> None:
        super().__init__(message, "STORE_ERROR")
