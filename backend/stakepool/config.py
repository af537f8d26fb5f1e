"""Ledger Configuration — deployment values loaded by pydantic-settings.

Invariants:
    - Every field can be overridden by an environment variable or .env entry
    - get_settings() returns one cached Settings per process
    - Default stake limits are whole tokens, converted to base units with checked math

Design Decisions:
    - Out of the box the service runs on a local SQLite file
    - Hosted Postgres URLs are normalized to the asyncpg driver here, once
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from stakepool.core.checked_math import to_base_units
from stakepool.core.enforce_server import MAX_NAME_BYTES, MAX_SERVER_ID_BYTES


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./stakepool.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Token
    accepted_mint: str = "BPtPUxkZc1BR1uEDMUkheABh9N94PUbnXvmXRdCLECBW"
    token_decimals: int = 9

    # Default policy for initialize_main (whole tokens)
    min_stake_tokens: int = 1000
    max_stake_tokens: int = 10000
    min_delegation_tokens: int = 500

    # Record bounds: may be tightened, never raised past the column sizes
    max_name_bytes: int = Field(MAX_NAME_BYTES, ge=1, le=MAX_NAME_BYTES)
    max_server_id_bytes: int = Field(MAX_SERVER_ID_BYTES, ge=1, le=MAX_SERVER_ID_BYTES)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def default_min_stake(self) -> int:
        return to_base_units(self.min_stake_tokens, self.token_decimals)

    @property
    def default_max_stake(self) -> int:
        return to_base_units(self.max_stake_tokens, self.token_decimals)

    @property
    def default_min_delegation(self) -> int:
        return to_base_units(self.min_delegation_tokens, self.token_decimals)


@lru_cache
def get_settings() -> Settings:
    return Settings()
