"""
Application package initializer.

The directory service is split into small layers: ``schemas`` for
request and response bodies, ``repositories`` for the record store,
``services`` for validation, search and user operations, and
``api/v1/endpoints`` for the HTTP routes.  Versioning is handled by
grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
