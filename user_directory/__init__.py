"""
Top‑level package for the User Directory API.

This file makes ``user_directory`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``user_directory.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
