"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from student_housing.config import Settings


class TestSettings:
    """Test settings parsing and validation."""

    def test_defaults(self):
        settings = Settings(_env_file=None, database_url="sqlite:///./database.sqlite")

        assert settings.api_prefix == "/api"
        assert settings.earth_radius_miles == 3959.0
        assert settings.flyer_page_size == "letter"
        assert settings.is_sqlite

    def test_sync_urls_get_async_drivers(self):
        sqlite_settings = Settings(_env_file=None, database_url="sqlite:///./housing.db")
        postgres_settings = Settings(_env_file=None, database_url="postgresql://user:pass@db:5432/housing")

        assert sqlite_settings.database_url == "sqlite+aiosqlite:///./housing.db"
        assert postgres_settings.database_url == "postgresql+asyncpg://user:pass@db:5432/housing"
        assert not postgres_settings.is_sqlite

    def test_rejects_unknown_environment(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, environment="qa")

    def test_flyer_page_size(self):
        assert Settings(_env_file=None, flyer_page_size="A4").flyer_page_size == "a4"

        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, flyer_page_size="legal")

    def test_environment_flags(self):
        settings = Settings(_env_file=None, environment="production")

        assert settings.is_production
        assert not settings.is_development
        assert not settings.is_testing
