"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Validation constants
PORT_MIN = 1
PORT_MAX = 65535
POOL_TIMEOUT_MIN = 1  # Minimum 1 second
POOL_TIMEOUT_MAX = 300  # Maximum 5 minutes
STATEMENT_TIMEOUT_MIN = 1000  # Minimum 1 second (in ms)
STATEMENT_TIMEOUT_MAX = 300000  # Maximum 5 minutes (in ms)

# Connection string prefixes mapped to their async driver
_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+psycopg://",
    "postgres://": "postgresql+psycopg://",
    "sqlite://": "sqlite+aiosqlite://",
}
_SUPPORTED_SCHEMES = (
    "postgresql://",
    "postgres://",
    "postgresql+psycopg://",
    "sqlite://",
    "sqlite+aiosqlite://",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "todolist"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # CORS settings
    # Empty = no CORS; use specific origins like ["https://example.com"]
    cors_origins: list[str] = []

    # Request size limits
    max_request_size: int = 1024 * 1024  # 1MB default

    # Timing/debug headers
    expose_timing_header: bool = True

    # Database timeouts
    database_pool_timeout: int = 30  # Connection pool timeout in seconds
    database_statement_timeout: int = 30000  # Statement timeout in milliseconds

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is a usable TCP port number."""
        if not PORT_MIN <= v <= PORT_MAX:
            msg = f"port must be between {PORT_MIN} and {PORT_MAX}"
            raise ValueError(msg)
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate the connection string points at a supported store."""
        if not v.startswith(_SUPPORTED_SCHEMES):
            msg = f"Unsupported database URL scheme: {v.split(':', 1)[0]}"
            raise ValueError(msg)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper_v

    @field_validator("database_pool_timeout")
    @classmethod
    def validate_pool_timeout(cls, v: int) -> int:
        """Validate database pool timeout is within reasonable bounds."""
        if v < POOL_TIMEOUT_MIN:
            msg = f"database_pool_timeout must be at least {POOL_TIMEOUT_MIN} second"
            raise ValueError(msg)
        if v > POOL_TIMEOUT_MAX:
            msg = f"database_pool_timeout must be at most {POOL_TIMEOUT_MAX} seconds"
            raise ValueError(msg)
        return v

    @field_validator("database_statement_timeout")
    @classmethod
    def validate_statement_timeout(cls, v: int) -> int:
        """Validate database statement timeout is within reasonable bounds."""
        if v < STATEMENT_TIMEOUT_MIN:
            msg = f"database_statement_timeout must be at least {STATEMENT_TIMEOUT_MIN}ms (1 second)"
            raise ValueError(msg)
        if v > STATEMENT_TIMEOUT_MAX:
            msg = f"database_statement_timeout must be at most {STATEMENT_TIMEOUT_MAX}ms (5 minutes)"
            raise ValueError(msg)
        return v

    @property
    def async_database_url(self) -> str:
        """Get the connection string with its async driver (psycopg3 or aiosqlite)."""
        url = self.database_url
        for prefix, async_prefix in _ASYNC_DRIVERS.items():
            if url.startswith(prefix):
                return url.replace(prefix, async_prefix, 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        """Whether the store is SQLite (no pool sizing or statement timeout)."""
        return self.async_database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
