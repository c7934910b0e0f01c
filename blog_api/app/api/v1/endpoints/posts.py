"""
Post endpoints for API v1.

Posts are returned as plain JSON because a patched post may hold
fields or values outside its schema.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Header, status

from blog_api.app.api.dependencies import get_post_service
from blog_api.app.core.errors import MSG_POST_CREATED, MSG_POST_DELETED, MSG_POST_UPDATED
from blog_api.app.services.post_service import PostService


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: Dict[str, Any] = Body(default_factory=dict),
    service: PostService = Depends(get_post_service),
) -> Dict[str, Any]:
    """Create an unpublished post for an existing author."""
    post = await service.create_post(body)
    return {"message": MSG_POST_CREATED, "post": post.to_payload()}


@router.patch("/{post_id}")
async def update_post(
    post_id: str,
    body: Dict[str, Any] = Body(default_factory=dict),
    service: PostService = Depends(get_post_service),
) -> Dict[str, Any]:
    """Merge the given fields into a post.

    ``id``, ``authorId`` and ``createdAt`` are read-only.
    """
    post = await service.update_post(post_id, body)
    return {"message": MSG_POST_UPDATED, "post": post.to_payload()}


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user_id: Optional[str] = Header(None, alias="user-id"),
    service: PostService = Depends(get_post_service),
) -> Dict[str, str]:
    """Delete a post.  Only its author or an admin may do so."""
    await service.delete_post(post_id, user_id)
    return {"message": MSG_POST_DELETED}
