"""
Pydantic models for user data.

``User`` is the stored record and also what the API returns: the
password is part of the payload, exactly as stored.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    admin = "admin"
    user = "user"


class User(BaseModel):
    """A user record."""

    id: int
    name: str = Field(..., examples=["Thiago"])
    email: str = Field(..., examples=["user@example.com"])
    password: str
    age: int = Field(..., ge=0)
    role: Role = Role.user


class UserUpdated(BaseModel):
    message: str
    user: User


class CleanupResult(BaseModel):
    """Outcome of removing users that are neither admins nor authors."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    removed_users: List[User] = Field(default_factory=list, alias="removedUsers")
