"""
Service layer.

Services hold the query and validation logic of the directory and
talk to persistence only through the ``UserStore`` interface, so API
handlers never touch SQL directly.
"""
