"""Post Repository: store adapter issuing the board's two query shapes.

Invariants:
    - list_recent: newest first by created_at, id breaks ties, at most `limit` rows
    - create: one row inserted, committed, and returned with server-assigned fields
    - Any SQLAlchemy or network failure surfaces as StorageError with the driver's message
"""

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bbs.infrastructure.database import storage_errors
from bbs.models.post import Post

logger = logging.getLogger(__name__)


class SqlPostRepository:
    """PostRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_recent(self, limit: int) -> Sequence[Post]:
        query = (
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        async with storage_errors("select"):
            result = await self._db.execute(query)
            return result.scalars().all()

    async def create(self, author: str | None, content: str) -> Post:
        post = Post(author=author, content=content)
        async with storage_errors("insert"):
            self._db.add(post)
            await self._db.commit()
            await self._db.refresh(post)
        logger.info("Post created", extra={"post_id": post.id})
        return post
