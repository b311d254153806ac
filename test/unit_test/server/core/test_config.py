"""
Unit tests for the settings model.
"""

import pytest

from pokecatalog.server.core.config import Settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DATABASE__URL",
        "DATABASE__AUTO_CREATE",
        "POKEAPI__ENABLED",
        "UPLOADS__DIR",
        "POKECATALOG_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        """Test the defaults used for local development."""
        settings = Settings(_env_file=None)

        assert settings.database.url == "sqlite+aiosqlite:///./pokecatalog.db"
        assert settings.database.auto_create is True
        assert settings.pokeapi.base_url == "https://pokeapi.co/api/v2"
        assert settings.pokeapi.seed_limit == 50
        assert settings.uploads.url_prefix == "/uploads/pokemon"
        assert settings.auth.min_password_length == 6
        assert settings.server_port == 8000
        assert settings.public_dir is None

    def test_nested_environment_variables(self, clean_env):
        """Test that double underscore variables fill grouped settings."""
        clean_env.setenv("DATABASE__URL", "postgresql://u:p@db/catalog")
        clean_env.setenv("POKEAPI__ENABLED", "false")
        clean_env.setenv("POKEAPI__TIMEOUT", "2.5")
        clean_env.setenv("AUTH__SESSION_SECRET", "s3cret")

        settings = Settings(_env_file=None)
        assert settings.database.url == "postgresql://u:p@db/catalog"
        assert settings.pokeapi.enabled is False
        assert settings.pokeapi.timeout == 2.5
        assert settings.auth.session_secret == "s3cret"

    def test_aliased_server_variables(self, clean_env):
        """Test the prefixed server variables."""
        clean_env.setenv("POKECATALOG_SERVER_PORT", "9000")
        clean_env.setenv("POKECATALOG_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)
        assert settings.server_port == 9000
        assert settings.log_level == "debug"

    def test_env_file(self, clean_env, tmp_path):
        """Test values are read from a dotenv file."""
        env_file = tmp_path / ".env"
        env_file.write_text("UPLOADS__DIR=/srv/uploads\nCORS__ORIGINS=[\"http://localhost:5173\"]\n")

        settings = Settings(_env_file=env_file)
        assert settings.uploads.dir == "/srv/uploads"
        assert settings.cors.origins == ["http://localhost:5173"]
