"""
Store configuration for neo-docmodels.

Settings are read from environment variables prefixed with ``DOCMODELS_``
and from an optional ``.env`` file.
"""
from typing import Optional, Literal
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr, field_validator


class StoreSettings(BaseSettings):
    """Document store settings."""

    model_config = SettingsConfigDict(
        env_prefix="DOCMODELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Backend selection
    store_backend: Literal["couchdb", "memory"] = Field(default="couchdb")

    # CouchDB Configuration
    couchdb_url: str = Field(default="http://localhost:5984")
    couchdb_database: str = Field(default="dom4")
    couchdb_username: Optional[str] = Field(default=None)
    couchdb_password: Optional[SecretStr] = Field(default=None)
    request_timeout: float = Field(default=10.0, gt=0)
    verify_ssl: bool = Field(default=True)

    # Key under which store write failures are reported in model errors
    store_error_key: str = Field(default="store", min_length=1)

    @field_validator("couchdb_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("couchdb_database")
    @classmethod
    def validate_database_name(cls, value: str) -> str:
        # CouchDB database names must start with a lowercase letter
        if not value or not value[0].islower():
            raise ValueError(f"Invalid CouchDB database name: {value!r}")
        return value

    @property
    def database_url(self) -> str:
        """Full URL of the configured database."""
        return f"{self.couchdb_url}/{self.couchdb_database}"

    @property
    def credentials(self) -> Optional[tuple]:
        """Basic auth credentials, if configured."""
        if self.couchdb_username and self.couchdb_password:
            return (self.couchdb_username, self.couchdb_password.get_secret_value())
        return None


@lru_cache()
def get_store_settings() -> StoreSettings:
    """Get cached store settings instance."""
    return StoreSettings()
