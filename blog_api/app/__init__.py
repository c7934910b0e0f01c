"""
Application package initializer.

Each domain (users, posts) lives in its own module and exposes a
router defined in ``api/v1/endpoints``.  Business rules are kept in
``services`` and the in‑memory collections in ``core.store``.
"""

from .main import app, create_app  # noqa: F401
