"""Root conftest: shared test configuration."""

import os

# Ensure tests never reach a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.pop("DATABASE_SERVICE_URL", None)
os.environ.pop("SUPABASE_SERVICE_DB_URL", None)
