"""Post ORM: the single persisted entity of the board.

Invariants:
    - id is a server-assigned, monotonically increasing bigint
    - content length is 1-500 characters (check constraint posts_content_length)
    - author is nullable; empty names are stored as NULL
    - created_at is assigned by the database at insert time and never updated
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger, CheckConstraint, DateTime, Index, Integer, Text, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from bbs.db.base import Base

CONTENT_MAX_LENGTH = 500
AUTHOR_MAX_LENGTH = 32


class Post(Base):
    """A single board message."""
    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            f"length(content) BETWEEN 1 AND {CONTENT_MAX_LENGTH}",
            name="posts_content_length",
        ),
        Index("ix_posts_created_at", "created_at"),
    )

    # SQLite only autoincrements INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    author: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author={self.author!r})>"
