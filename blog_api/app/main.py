"""
Main entrypoint for the Blog API.

This module assembles the FastAPI application, sets up logging,
creates the user and post stores and includes the versioned routers.
``create_app`` builds and configures an app; the module-level ``app``
is what an ASGI server loads, e.g.::

    uvicorn blog_api.app.main:app --port 3003

Tests call ``create_app`` with their own settings and stores so that
each test starts from a known state.
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import InMemoryStore, PostStore, seed_users
from .services.post_service import PostService
from .services.user_service import UserService


def create_app(
    settings: Optional[Settings] = None,
    users: Optional[InMemoryStore] = None,
    posts: Optional[PostStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the environment based
        ``settings`` instance.
    users : Optional[InMemoryStore]
        User store.  When omitted a new store is created, holding the
        seed users if ``settings.seed_users`` is enabled.
    posts : Optional[PostStore]
        Post store.  When omitted an empty store using
        ``settings.post_id_policy`` is created.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings)

    if users is None:
        users = InMemoryStore(seed_users() if settings.seed_users else ())
    if posts is None:
        posts = PostStore(id_policy=settings.post_id_policy)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.user_service = UserService(users, posts)
    app.state.post_service = PostService(users, posts, strict_patch=settings.strict_post_patch)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
