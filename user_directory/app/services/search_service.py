"""
Substring search over users.

A user matches when the query occurs, ignoring case, anywhere in its
``name`` or in its ``email``.  The store is asked once per field and
the two result sets are merged, so a user matching on both fields is
returned once.  Results keep the store's id order and are projected to
``name`` and ``email``.
"""

import logging
from typing import Dict, List

from user_directory.app.repositories.user_store import SEARCHABLE_FIELDS, UserStore
from user_directory.app.schemas.user import UserSearchResult

logger = logging.getLogger(__name__)


def search_users(store: UserStore, query: str) -> List[UserSearchResult]:
    """Return every user whose name or email contains ``query``.

    ``query`` must already have passed ``validate_search_query``.
    """
    matches: Dict[int, dict] = {}
    for field in SEARCHABLE_FIELDS:
        for row in store.find_by_substring(field, query):
            matches.setdefault(row["id"], row)
    results = [
        UserSearchResult(name=row["name"], email=row["email"])
        for _, row in sorted(matches.items())
    ]
    logger.info("Search %r matched %d user(s)", query, len(results))
    return results
