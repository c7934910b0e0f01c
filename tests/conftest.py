from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from blog_api.app.core.config import Settings
from blog_api.app.core.store import InMemoryStore, PostStore, seed_users
from blog_api.app.main import create_app


@pytest.fixture()
def settings() -> Settings:
    return Settings(post_id_policy="length", strict_post_patch=False, seed_users=True, api_prefix="")


@pytest.fixture()
def users() -> InMemoryStore:
    return InMemoryStore(seed_users())


@pytest.fixture()
def posts(settings: Settings) -> PostStore:
    return PostStore(id_policy=settings.post_id_policy)


@pytest.fixture()
def client(settings: Settings, users: InMemoryStore, posts: PostStore):
    app = create_app(settings=settings, users=users, posts=posts)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_post(client: TestClient):
    """Create a post through the API and return its payload."""

    def _make_post(author_id: int = 2, title: str = "Primeiro post", content: str = "Conteúdo suficiente"):
        response = client.post("/posts", json={"title": title, "content": content, "authorId": author_id})
        assert response.status_code == 201, response.text
        return response.json()["post"]

    return _make_post
