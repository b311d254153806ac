"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.

Grouped settings use double underscore (__) as the nested delimiter, for example
``DATABASE__URL`` maps to ``settings.database.url``.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class DatabaseConfig(BaseModel):
    """Record store configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./pokecatalog.db",
        description="Async SQLAlchemy connection URL (postgresql URLs are normalized to asyncpg)",
    )
    auto_create: bool = Field(
        default=True,
        description="Create missing tables on startup (development only, use Alembic in production)",
    )
    echo: bool = Field(default=False, description="Echo emitted SQL statements")


class AuthConfig(BaseModel):
    """Session cookie configuration."""

    session_secret: str = Field(
        default="change-me-in-production",
        description="Secret used to sign the session cookie",
    )
    session_cookie: str = Field(default="pokecatalog_session", description="Session cookie name")
    session_max_age: int = Field(default=14 * 24 * 60 * 60, ge=60, description="Session lifetime in seconds")
    https_only: bool = Field(default=False, description="Only send the session cookie over HTTPS")
    min_password_length: int = Field(default=6, ge=1, description="Minimum accepted password length")


class PokeApiConfig(BaseModel):
    """PokeAPI enrichment configuration."""

    base_url: str = Field(default="https://pokeapi.co/api/v2", description="PokeAPI base URL")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    enabled: bool = Field(default=True, description="Fetch extended details for the detail view")
    seed_limit: int = Field(default=50, ge=1, description="Number of records imported by the seeder")


class UploadConfig(BaseModel):
    """Uploaded image storage configuration."""

    dir: str = Field(default="./public/uploads/pokemon", description="Directory uploaded images are written to")
    url_prefix: str = Field(default="/uploads/pokemon", description="Public path prefix of uploaded images")


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(default=True, description="Allow credentials in CORS requests")
    allow_methods: list[str] = Field(default=["*"], description="Allowed HTTP methods (use * for all)")
    allow_headers: list[str] = Field(default=["*"], description="Allowed HTTP headers (use * for all)")


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    # =====================================================================
    # PokeCatalog Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="PokeCatalog server host address to bind to",
        alias="POKECATALOG_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="PokeCatalog server port number",
        alias="POKECATALOG_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="PokeCatalog logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="POKECATALOG_LOG_LEVEL",
    )
    public_dir: Optional[str] = Field(
        default=None,
        description="Optional directory of static assets served at the site root",
        alias="POKECATALOG_PUBLIC_DIR",
    )

    # =====================================================================
    # Grouped Configuration
    # =====================================================================
    database: DatabaseConfig = Field(default_factory=DatabaseConfig, description="Record store configuration")
    auth: AuthConfig = Field(default_factory=AuthConfig, description="Session configuration")
    pokeapi: PokeApiConfig = Field(default_factory=PokeApiConfig, description="PokeAPI configuration")
    uploads: UploadConfig = Field(default_factory=UploadConfig, description="Image upload configuration")
    cors: CORSConfig = Field(default_factory=CORSConfig, description="CORS configuration")


settings = Settings()
