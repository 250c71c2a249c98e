"""Posts: list and create board messages.

Invariants:
    - List returns at most settings.posts_list_limit posts, newest first
    - Create bodies are parsed as JSON whatever the Content-Type says
    - Create validates via PostCreate before any store access
    - Admin create writes through the service role; 403 when unconfigured,
      checked before the body is read
    - Storage failures propagate as StorageError to the global handler
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from bbs.api.error_handlers import flatten_validation_errors
from bbs.config import Settings, get_settings
from bbs.core.errors import MalformedRequestError, PayloadValidationError
from bbs.core.repository_protocols import PostRepository
from bbs.infrastructure.database import get_db, get_service_db
from bbs.infrastructure.post_repository import SqlPostRepository
from bbs.schemas.post import (
    PostCreate, PostEnvelope, PostListResponse, PostResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])

_CREATE_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {"schema": PostCreate.model_json_schema()},
        },
    },
}


def get_post_repository(
    db: AsyncSession = Depends(get_db),
) -> PostRepository:
    return SqlPostRepository(db)


def get_service_post_repository(
    db: AsyncSession = Depends(get_service_db),
) -> PostRepository:
    return SqlPostRepository(db)


async def read_post_payload(request: Request) -> PostCreate:
    """Parse the raw body as JSON, then validate it as a PostCreate.

    Decode failures (empty, truncated, non-UTF-8) are MalformedRequestError;
    any parseable value that fails the schema, null included, is
    PayloadValidationError.
    """
    raw = await request.body()
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedRequestError() from e
    try:
        return PostCreate.model_validate(data)
    except ValidationError as e:
        raise PayloadValidationError(
            flatten_validation_errors(e.errors()),
        ) from e


@router.get("", response_model=PostListResponse)
async def list_posts(
    repo: PostRepository = Depends(get_post_repository),
    settings: Settings = Depends(get_settings),
):
    """List the most recent posts."""
    posts = await repo.list_recent(settings.posts_list_limit)
    return PostListResponse(
        posts=[PostResponse.model_validate(p) for p in posts],
    )


@router.post(
    "", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED,
    openapi_extra=_CREATE_BODY_DOC,
)
async def create_post(
    body: PostCreate = Depends(read_post_payload),
    repo: PostRepository = Depends(get_post_repository),
):
    """Create a post under the public role."""
    post = await repo.create(body.author, body.content)
    return PostEnvelope(post=PostResponse.model_validate(post))


@router.post(
    "/admin", response_model=PostEnvelope,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_CREATE_BODY_DOC,
)
async def create_post_as_service(
    repo: PostRepository = Depends(get_service_post_repository),
    body: PostCreate = Depends(read_post_payload),
):
    """Create a post through the elevated-privilege connection."""
    post = await repo.create(body.author, body.content)
    logger.info("Post created via service role", extra={"post_id": post.id})
    return PostEnvelope(post=PostResponse.model_validate(post))
