"""Settings parsing and the startup configuration check."""

import pytest
from pydantic import ValidationError

from postboard.config import DEFAULT_DATABASE_URL, Settings


def test_log_level_is_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")


def test_cors_origins_list_splits_and_strips():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")

    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_default_sqlite_url_is_flagged():
    settings = Settings(_env_file=None, database_url=DEFAULT_DATABASE_URL, log_level="INFO")

    with pytest.raises(ValueError, match="DATABASE_URL"):
        settings.validate_required_for_production()


def test_explicit_database_url_passes():
    settings = Settings(
        _env_file=None,
        database_url="postgresql+asyncpg://user:pw@db/postboard",
        log_level="INFO",
    )

    settings.validate_required_for_production()
    assert not settings.is_sqlite
