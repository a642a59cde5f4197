"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - ConnectionConfig is immutable once built

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Env names RECONN_TIME / CONN_CHECK / RECONN_TRIES kept from the deployed service
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class ConnectionConfig:
    """What the connection supervisor needs to keep the store reachable."""
    url: str
    reconnect_interval: float = 5
    check_enabled: bool = True
    reconnect_attempts: int = 5


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://users:users@db:5432/users"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgresql:// URLs need the asyncpg driver suffix."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    create_schema: bool = False

    # Connection supervisor
    reconn_time: float = Field(5, ge=0)
    conn_check: bool = True
    reconn_tries: int = Field(5, ge=0)

    # Credentials
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # Listener
    host: str = "0.0.0.0"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def connection_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            url=self.database_url,
            reconnect_interval=self.reconn_time,
            check_enabled=self.conn_check,
            reconnect_attempts=self.reconn_tries,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
