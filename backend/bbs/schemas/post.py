"""Post Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - Whitespace is trimmed before any length check
    - PostCreate.content: 1-500 chars after trim
    - PostCreate.author: <= 32 chars after trim; empty after trim becomes None
    - Unknown keys in the payload are ignored
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bbs.models.post import AUTHOR_MAX_LENGTH, CONTENT_MAX_LENGTH


class PostCreate(BaseModel):
    """Create payload: trims fields and normalizes an empty author to None."""
    model_config = ConfigDict(str_strip_whitespace=True)

    author: str | None = Field(None, max_length=AUTHOR_MAX_LENGTH)
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)

    @field_validator("author")
    @classmethod
    def empty_author_is_absent(cls, v: str | None) -> str | None:
        return v or None


class PostResponse(BaseModel):
    """Public-facing post data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    author: str | None
    content: str
    created_at: datetime


class PostEnvelope(BaseModel):
    post: PostResponse


class PostListResponse(BaseModel):
    posts: list[PostResponse]
