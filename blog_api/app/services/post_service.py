"""
Business logic for posts.

Creating a post checks the referenced author, patching refuses the
protected keys and deleting requires the acting user to be the author
or an admin.  As with users, a failing gate raises before any store is
modified.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import ValidationError

from ..core.errors import (
    MSG_ACTING_USER_NOT_FOUND,
    MSG_AUTHOR_NOT_FOUND,
    MSG_CONTENT_TOO_SHORT,
    MSG_DELETE_FORBIDDEN,
    MSG_INVALID_TYPES,
    MSG_POST_FIELDS_REQUIRED,
    MSG_POST_ID_INVALID,
    MSG_POST_NOT_FOUND,
    MSG_POST_NOT_FOUND_FOR_DELETE,
    MSG_PROTECTED_FIELD,
    MSG_TITLE_TOO_SHORT,
    MSG_USER_ID_HEADER_INVALID,
    Forbidden,
    InvalidInput,
    NotFound,
)
from ..core.store import InMemoryStore, PostStore
from ..core.validation import first_present, is_number, require_number
from ..schemas.post import CONTENT_MIN_LENGTH, PROTECTED_FIELDS, TITLE_MIN_LENGTH, Post, PostPatch
from ..schemas.user import Role


logger = logging.getLogger(__name__)


def _display(value: Any) -> str:
    """Render a JSON value the way it appears in error messages."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PostService:
    """Pipelines for creating, patching and deleting posts."""

    def __init__(self, users: InMemoryStore, posts: PostStore, strict_patch: bool = False) -> None:
        self.users = users
        self.posts = posts
        self.strict_patch = strict_patch

    async def create_post(self, body: Dict[str, Any]) -> Post:
        """Validate the payload and append a new unpublished post.

        Raises ``NotFound`` when ``authorId`` is not a number matching a
        user id; ``1.0`` finds user 1 while ``"1"`` finds nobody.
        """
        title = body.get("title")
        content = body.get("content")
        author_id = body.get("authorId")
        if not title or not content or not author_id:
            raise InvalidInput(MSG_POST_FIELDS_REQUIRED)
        if not isinstance(title, str) or not isinstance(content, str):
            raise InvalidInput(MSG_INVALID_TYPES)
        if len(title) < TITLE_MIN_LENGTH:
            raise InvalidInput(MSG_TITLE_TOO_SHORT)
        if len(content) < CONTENT_MIN_LENGTH:
            raise InvalidInput(MSG_CONTENT_TOO_SHORT)

        with self.users.locked(), self.posts.locked():
            author = self.users.get(author_id) if is_number(author_id) else None
            if author is None:
                raise NotFound(MSG_AUTHOR_NOT_FOUND.format(author_id=_display(author_id)))
            post = Post(
                id=self.posts.next_id(),
                title=title,
                content=content,
                author_id=author.id,
                created_at=datetime.now(timezone.utc),
                published=False,
            )
            self.posts.add(post)
        logger.info("Created post %s by user %s", post.id, author.id)
        return post

    async def update_post(self, raw_id: Any, body: Dict[str, Any]) -> Post:
        """Shallow-merge ``body`` onto an existing post.

        ``id``, ``authorId`` and ``createdAt`` can never be changed; the
        first of them present in ``body`` is reported and nothing is
        merged.
        """
        post_id = require_number(raw_id, MSG_POST_ID_INVALID)
        with self.posts.locked():
            current = self.posts.get(post_id)
            if current is None:
                raise NotFound(MSG_POST_NOT_FOUND)
            protected = first_present(body, PROTECTED_FIELDS)
            if protected is not None:
                raise InvalidInput(MSG_PROTECTED_FIELD.format(field=protected))
            if self.strict_patch:
                try:
                    PostPatch.model_validate(body)
                except ValidationError as exc:
                    logger.debug("Rejected patch for post %s: %s", post_id, exc)
                    raise InvalidInput(MSG_INVALID_TYPES) from exc
            merged = current.model_dump(by_alias=True)
            merged.update(body)
            # No validation here: a permissive merge keeps whatever shape it was sent.
            updated = Post.model_construct(**merged)
            self.posts.replace(updated)
        logger.info("Updated post %s fields %s", updated.id, sorted(body))
        return updated

    async def delete_post(self, raw_id: Any, raw_user_id: Any) -> Post:
        """Remove a post on behalf of its author or an admin."""
        post_id = require_number(raw_id, MSG_POST_ID_INVALID)
        user_id = require_number(raw_user_id, MSG_USER_ID_HEADER_INVALID)
        with self.users.locked(), self.posts.locked():
            post = self.posts.get(post_id)
            if post is None:
                raise NotFound(MSG_POST_NOT_FOUND_FOR_DELETE)
            user = self.users.get(user_id)
            if user is None:
                raise NotFound(MSG_ACTING_USER_NOT_FOUND)
            if post.author_id != user.id and user.role != Role.admin:
                raise Forbidden(MSG_DELETE_FORBIDDEN)
            removed = self.posts.remove(post.id)
        logger.info("User %s deleted post %s", user.id, removed.id)
        return removed
