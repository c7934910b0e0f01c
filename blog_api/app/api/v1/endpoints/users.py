"""
User endpoints for API v1.

Lookup by id, filtering by age range, full update and removal of
inactive users.  ``/age-range`` and ``/cleanup-inactive`` are declared
before ``/{user_id}`` so they are not captured as ids.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from blog_api.app.api.dependencies import get_user_service
from blog_api.app.core.errors import MSG_USER_UPDATED
from blog_api.app.schemas.user import CleanupResult, User, UserUpdated
from blog_api.app.services.user_service import UserService


router = APIRouter()


@router.get("/age-range", response_model=List[User])
async def list_users_by_age(
    min_age: Optional[str] = Query(None, alias="min"),
    max_age: Optional[str] = Query(None, alias="max"),
    service: UserService = Depends(get_user_service),
) -> List[User]:
    """Return users whose age lies within ``[min, max]``.

    An empty list is returned when nobody matches.
    """
    return await service.list_by_age(min_age, max_age)


@router.delete("/cleanup-inactive", response_model=CleanupResult)
async def cleanup_inactive_users(
    confirm: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> CleanupResult:
    """Remove non-admin users without posts.

    Requires ``?confirm=true``.  Safe to repeat: a second call reports
    an empty ``removedUsers`` list.
    """
    return await service.cleanup_inactive(confirm)


@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> User:
    """Retrieve a user by ID."""
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserUpdated)
async def update_user(
    user_id: str,
    body: Dict[str, Any] = Body(default_factory=dict),
    service: UserService = Depends(get_user_service),
) -> UserUpdated:
    """Replace ``name``, ``email``, ``role`` and ``age`` of a user.

    All four fields are required.  The e‑mail must not belong to another
    user (case-insensitive) and is stored lower-cased.
    """
    user = await service.update_user(user_id, body)
    return UserUpdated(message=MSG_USER_UPDATED, user=user)
