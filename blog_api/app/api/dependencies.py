"""FastAPI dependencies resolving the services bound to the running app."""

from fastapi import Request

from ..services.post_service import PostService
from ..services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_post_service(request: Request) -> PostService:
    return request.app.state.post_service
