"""Settings: env alias order, empty fallthrough, dotenv layering, URL rewrite."""

import pytest

from bbs.config import Settings

ENV_NAMES = (
    "DATABASE_URL", "SUPABASE_DB_URL",
    "DATABASE_SERVICE_URL", "SUPABASE_SERVICE_DB_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_service_role():
    settings = Settings(_env_file=None)
    assert settings.database_url.startswith("postgresql+asyncpg://")
    assert settings.database_service_url is None
    assert settings.service_enabled is False
    assert settings.posts_list_limit == 50


def test_postgres_urls_rewritten_for_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://anon:pw@db:5432/app")
    monkeypatch.setenv("DATABASE_SERVICE_URL", "postgresql://svc:pw@db:5432/app")
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql+asyncpg://anon:pw@db:5432/app"
    assert settings.database_service_url == "postgresql+asyncpg://svc:pw@db:5432/app"
    assert settings.service_enabled is True


def test_other_drivers_untouched(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///board.db")
    assert Settings(_env_file=None).database_url == "sqlite+aiosqlite:///board.db"


def test_first_alias_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://first/db")
    monkeypatch.setenv("SUPABASE_DB_URL", "postgresql://second/db")
    assert Settings(_env_file=None).database_url.endswith("//first/db")


def test_empty_value_falls_through_to_next_alias(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("SUPABASE_DB_URL", "postgresql://second/db")
    assert Settings(_env_file=None).database_url.endswith("//second/db")


def test_blank_service_url_disables_service_role():
    settings = Settings(_env_file=None, database_service_url="   ")
    assert settings.database_service_url is None
    assert settings.service_enabled is False


def test_local_override_file_beats_static_file(tmp_path):
    static = tmp_path / ".env"
    local = tmp_path / ".env.local"
    static.write_text("DATABASE_URL=postgresql://static/db\nLOG_LEVEL=DEBUG\n")
    local.write_text("DATABASE_URL=postgresql://local/db\n")

    settings = Settings(_env_file=(static, local))

    assert settings.database_url.endswith("//local/db")
    assert settings.log_level == "DEBUG"


def test_environment_beats_files(tmp_path, monkeypatch):
    static = tmp_path / ".env"
    static.write_text("DATABASE_URL=postgresql://static/db\n")
    monkeypatch.setenv("DATABASE_URL", "postgresql://env/db")

    assert Settings(_env_file=static).database_url.endswith("//env/db")
