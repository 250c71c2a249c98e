"""Boundary Protocols: contracts between routes and the store adapter.

Invariants:
    - Routes depend on PostRepository, never on SQLAlchemy statements
    - Exactly two query shapes exist: ordered/limited select, single-row insert

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any fake
"""

from datetime import datetime
from typing import Protocol, Sequence


class PostLike(Protocol):
    """Structural contract for a stored post."""
    id: int
    author: str | None
    content: str
    created_at: datetime


class PostRepository(Protocol):
    """Contract for post persistence: implemented by infrastructure."""
    async def list_recent(self, limit: int) -> Sequence[PostLike]: ...
    async def create(self, author: str | None, content: str) -> PostLike: ...
