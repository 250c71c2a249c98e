"""Create posts table with content check and public RLS policies.

Revision ID: 001_create_posts
Revises: None
Create Date: 2025-10-23

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_posts"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

POLICIES = (
    ("anon read posts", "for select using (true)"),
    ("anon insert posts", "for insert with check (true)"),
)


def upgrade() -> None:
    op.create_table(
        "posts",
        sa.Column(
            "id", sa.BigInteger().with_variant(sa.Integer, "sqlite"),
            primary_key=True, autoincrement=True,
        ),
        sa.Column("author", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "length(content) BETWEEN 1 AND 500", name="posts_content_length",
        ),
    )
    op.create_index("ix_posts_created_at", "posts", ["created_at"])

    if op.get_bind().dialect.name != "postgresql":
        return
    op.execute("alter table posts enable row level security")
    for name, rule in POLICIES:
        op.execute(f'create policy "{name}" on posts {rule}')


def downgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        for name, _ in POLICIES:
            op.execute(f'drop policy if exists "{name}" on posts')
    op.drop_index("ix_posts_created_at", table_name="posts")
    op.drop_table("posts")
