"""Settings: env parsing, URL rewriting and validation."""

import pytest
from pydantic import ValidationError

from gifapi.config import Settings


def test_postgres_url_rewritten_for_asyncpg():
    s = Settings(database_url="postgresql://u:p@db:5432/gifs", _env_file=None)
    assert s.database_url == "postgresql+asyncpg://u:p@db:5432/gifs"


def test_short_postgres_scheme_rewritten():
    s = Settings(database_url="postgres://u:p@db/gifs", _env_file=None)
    assert s.database_url == "postgresql+asyncpg://u:p@db/gifs"


def test_other_drivers_left_alone():
    s = Settings(database_url="sqlite+aiosqlite:///gifs.db", _env_file=None)
    assert s.database_url == "sqlite+aiosqlite:///gifs.db"


def test_database_url_is_required(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    s = Settings(_env_file=None)
    assert s.database_pool_size == 20
    assert s.snowflake_epoch_ms == 1420070400000
    assert s.snowflake_worker_id == 1
    assert s.snowflake_process_id == 1
    assert s.port == 3030
    assert s.database_create_schema is False


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("SNOWFLAKE_WORKER_ID", "3")
    monkeypatch.setenv("DATABASE_POOL_SIZE", "5")
    s = Settings(_env_file=None)
    assert s.snowflake_worker_id == 3
    assert s.database_pool_size == 5


@pytest.mark.parametrize("field", ["snowflake_worker_id", "snowflake_process_id"])
def test_snowflake_ids_range_checked(field):
    with pytest.raises(ValidationError):
        Settings(
            database_url="sqlite+aiosqlite:///:memory:",
            _env_file=None,
            **{field: 32},
        )
