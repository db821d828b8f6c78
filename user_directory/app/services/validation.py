"""
Search query validation.

A query is rejected before any store call when it is missing or blank,
or when every visible character is punctuation or a symbol.  Both
checks are enforced by the API (HTTP 400) and reused by the client
before it sends a request.
"""

import unicodedata
from typing import Optional

from user_directory.app.core.exceptions import EmptyQueryError, SymbolOnlyQueryError


def is_symbol_only(text: str) -> bool:
    """Return True if every non-whitespace character is punctuation or a symbol.

    Unicode categories ``P*`` (punctuation) and ``S*`` (symbols) count;
    letters, digits and marks do not.  Text with no visible characters
    is not symbol-only.
    """
    visible = [ch for ch in text if not ch.isspace()]
    if not visible:
        return False
    return all(unicodedata.category(ch)[0] in ("P", "S") for ch in visible)


def validate_search_query(query: Optional[str]) -> str:
    """Return the trimmed query or raise a ``QueryValidationError``.

    Raises
    ------
    EmptyQueryError
        The query is ``None``, empty or whitespace only.
    SymbolOnlyQueryError
        The query has no letters, digits or other content.
    """
    if query is None or not query.strip():
        raise EmptyQueryError(query)
    if is_symbol_only(query):
        raise SymbolOnlyQueryError(query)
    return query.strip()
