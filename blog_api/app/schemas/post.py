"""
Pydantic models for posts.

Field names are snake_case in Python and camelCase on the wire
(``authorId``, ``createdAt``).  ``Post`` accepts extra keys because a
PATCH may add fields the model does not declare; they are kept on the
record and returned with it.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


# Keys a PATCH body may never carry, in the order they are checked.
PROTECTED_FIELDS = ("id", "authorId", "createdAt")

TITLE_MIN_LENGTH = 3
CONTENT_MIN_LENGTH = 10


class Post(BaseModel):
    """A post record."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    title: str
    content: str
    author_id: int = Field(..., alias="authorId")
    created_at: datetime = Field(..., alias="createdAt")
    published: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with wire names.

        Patched values are not re-validated, so a field may hold a value
        of another type; serializer warnings for those are silenced.
        """
        return self.model_dump(mode="json", by_alias=True, warnings=False)


class PostPatch(BaseModel):
    """Typed view of a PATCH body used when strict patching is enabled.

    Only the declared fields are checked, and only when present: an
    explicit null is rejected.  Other keys pass through.
    """

    model_config = ConfigDict(extra="allow")

    title: StrictStr = Field(None, min_length=TITLE_MIN_LENGTH)
    content: StrictStr = Field(None, min_length=CONTENT_MIN_LENGTH)
    published: StrictBool = None
