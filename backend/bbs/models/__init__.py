"""ORM Models: SQLAlchemy declarative models.

All models imported here so Base.metadata is populated before create_all
or Alembic autogenerate runs.
"""

from bbs.models.post import Post  # noqa: F401
