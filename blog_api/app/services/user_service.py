"""
Business logic for users.

Every public coroutine is one pipeline: the gates run in a fixed order
and the first failing one raises a ``ServiceError``.  The store is
only touched after every gate has passed.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import (
    MSG_AGE_RANGE_NOT_NUMERIC,
    MSG_AGE_RANGE_REQUIRED,
    MSG_CLEANUP_CONFIRM_REQUIRED,
    MSG_CLEANUP_DONE,
    MSG_EMAIL_IN_USE,
    MSG_INVALID_AGE,
    MSG_INVALID_ROLE,
    MSG_INVALID_TYPES,
    MSG_UPDATE_FIELDS_REQUIRED,
    MSG_USER_ID_INVALID,
    MSG_USER_NOT_FOUND,
    Conflict,
    InvalidInput,
    NotFound,
)
from ..core.store import InMemoryStore, PostStore
from ..core.validation import is_number, parse_number, require_number
from ..schemas.user import CleanupResult, Role, User


logger = logging.getLogger(__name__)


class UserService:
    """Pipelines for reading, updating and pruning users."""

    def __init__(self, users: InMemoryStore, posts: PostStore) -> None:
        self.users = users
        self.posts = posts

    async def get_user(self, raw_id: Any) -> User:
        user_id = require_number(raw_id, MSG_USER_ID_INVALID)
        user = self.users.get(user_id)
        if user is None:
            raise NotFound(MSG_USER_NOT_FOUND)
        return user

    async def list_by_age(self, raw_min: Optional[str], raw_max: Optional[str]) -> List[User]:
        """Return users with ``min <= age <= max`` in store order.

        An empty result is not an error.
        """
        if not raw_min or not raw_max:
            raise InvalidInput(MSG_AGE_RANGE_REQUIRED)
        min_age = parse_number(raw_min)
        max_age = parse_number(raw_max)
        if min_age is None or max_age is None:
            raise InvalidInput(MSG_AGE_RANGE_NOT_NUMERIC)
        return self.users.filter(lambda user: min_age <= user.age <= max_age)

    async def update_user(self, raw_id: Any, body: Dict[str, Any]) -> User:
        """Replace name, email, role and age of a user.

        ``id`` and ``password`` are preserved and the email is stored
        lower-cased.  Raises ``Conflict`` if another user already owns
        the email, compared case-insensitively.
        """
        user_id = require_number(raw_id, MSG_USER_ID_INVALID)
        name = body.get("name")
        email = body.get("email")
        role = body.get("role")
        age = body.get("age", ...)
        if not name or not email or not role or age is ...:
            raise InvalidInput(MSG_UPDATE_FIELDS_REQUIRED)
        if not all(isinstance(value, str) for value in (name, email, role)) or not is_number(age):
            raise InvalidInput(MSG_INVALID_TYPES)
        if role not in {member.value for member in Role}:
            raise InvalidInput(MSG_INVALID_ROLE)
        if not float(age).is_integer() or age < 0:
            raise InvalidInput(MSG_INVALID_AGE)

        with self.users.locked():
            current = self.users.get(user_id)
            if current is None:
                raise NotFound(MSG_USER_NOT_FOUND)
            normalized_email = email.lower()
            owner = next(
                (user for user in self.users.all() if user.email.lower() == normalized_email),
                None,
            )
            if owner is not None and owner.id != current.id:
                raise Conflict(MSG_EMAIL_IN_USE)
            updated = current.model_copy(
                update={"name": name, "email": normalized_email, "role": Role(role), "age": int(age)}
            )
            self.users.replace(updated)
        logger.info("Updated user %s", updated.id)
        return updated

    async def cleanup_inactive(self, confirm: Optional[str]) -> CleanupResult:
        """Remove users that are not admins and have authored no post.

        Requires ``confirm`` to be exactly ``"true"``.  Running it again
        right away removes nothing.
        """
        if confirm != "true":
            raise InvalidInput(MSG_CLEANUP_CONFIRM_REQUIRED)
        with self.users.locked(), self.posts.locked():
            author_ids = {post.author_id for post in self.posts.all()}
            removed = self.users.retain(
                lambda user: user.role == Role.admin or user.id in author_ids
            )
        if removed:
            logger.info("Removed %d inactive users: %s", len(removed), [user.id for user in removed])
        return CleanupResult(message=MSG_CLEANUP_DONE, removed_users=removed)
