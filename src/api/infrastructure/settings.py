"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        USERMGMT_DB_DRIVER: SQLAlchemy async driver (default: postgresql+asyncpg)
        USERMGMT_DB_HOST: Database host (default: localhost)
        USERMGMT_DB_PORT: Database port (default: 5432)
        USERMGMT_DB_DATABASE: Database name, or file path for SQLite (default: usermanagement)
        USERMGMT_DB_USERNAME: Database user (default: usermanagement)
        USERMGMT_DB_PASSWORD: Database password (required in production)
        USERMGMT_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        USERMGMT_DB_ECHO: Log emitted SQL (default: false)
        USERMGMT_DB_CREATE_SCHEMA: Create missing tables at startup (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="USERMGMT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    driver: str = Field(
        default="postgresql+asyncpg",
        description="SQLAlchemy async driver name",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="usermanagement", description="Database name")
    username: str = Field(default="usermanagement", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")
    create_schema: bool = Field(
        default=True,
        description="Create missing identity tables at startup",
    )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured driver targets SQLite."""
        return self.driver.startswith("sqlite")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.is_sqlite:
            return f"{self.driver}:///{self.database}"
        return f"{self.driver}://{self.username}@{self.host}:{self.port}/{self.database}"


class IdentitySettings(BaseSettings):
    """Rules enforced by the user manager.

    Defaults mirror the usual identity-framework defaults: six character
    passwords that mix digits, lower and upper case letters and at least
    one symbol, and globally unique email addresses.

    Environment variables use the USERMGMT_IDENTITY_ prefix, e.g.
    USERMGMT_IDENTITY_PASSWORD_REQUIRED_LENGTH=12.
    """

    model_config = SettingsConfigDict(
        env_prefix="USERMGMT_IDENTITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    password_required_length: int = Field(default=6, ge=1, le=128)
    password_required_unique_chars: int = Field(default=1, ge=1, le=128)
    password_require_digit: bool = True
    password_require_lowercase: bool = True
    password_require_uppercase: bool = True
    password_require_non_alphanumeric: bool = True
    allowed_user_name_characters: str = Field(
        default=(
            "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._@+"
        ),
        description="Characters permitted in user names (empty allows any)",
    )
    require_unique_email: bool = True

    @model_validator(mode="after")
    def validate_password_rules(self) -> "IdentitySettings":
        """Validate unique character count does not exceed the length rule."""
        if self.password_required_unique_chars > self.password_required_length:
            raise ValueError(
                f"password_required_unique_chars ({self.password_required_unique_chars}) "
                f"must be <= password_required_length ({self.password_required_length})"
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="USERMGMT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="User Management API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def identity(self) -> IdentitySettings:
        """Get identity settings."""
        return get_identity_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_identity_settings() -> IdentitySettings:
    """Get cached identity settings."""
    return IdentitySettings()
