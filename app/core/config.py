"""
Application configuration models and helpers.

Settings are read once from the environment (and ``.env`` / ``.env.local``)
into an immutable object that is passed to every component that needs it.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.errors import ConfigurationError

DEFAULT_REDIRECT_URI = "http://localhost:3000/auth/pike13/callback"


class AppSettings(BaseSettings):
    """Root settings object for the Pike13 updater."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    pike13_subdomain: Optional[str] = Field(
        None,
        alias="PIKE13_SUBDOMAIN",
        description="Tenant subdomain, e.g. 'myclub' for myclub.pike13.com.",
    )
    client_id: str = Field(..., alias="CLIENT_ID")
    client_secret: str = Field(..., alias="CLIENT_SECRET")
    redirect_uri: str = Field(DEFAULT_REDIRECT_URI, alias="REDIRECT_URI")
    usa_fencing_field_name: Optional[str] = Field(
        None,
        alias="USA_FENCING_FIELD_NAME",
        description="Exact display name of the membership custom field, if known.",
    )
    port: int = Field(3000, alias="PORT")
    log_level: str = Field("INFO", alias="APP_LOG_LEVEL")
    token_file_path: str = Field("last_token.json", alias="TOKEN_FILE_PATH")
    session_secret: Optional[str] = Field(
        None,
        alias="SESSION_SECRET",
        description="Secret for the session cookie; falls back to CLIENT_SECRET.",
    )
    session_max_age_seconds: int = Field(24 * 60 * 60, alias="SESSION_MAX_AGE")

    def require_subdomain(self) -> str:
        """Return the tenant subdomain or fail before any network access."""
        if not self.pike13_subdomain:
            raise ConfigurationError("PIKE13_SUBDOMAIN not set")
        return self.pike13_subdomain


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "DEFAULT_REDIRECT_URI",
    "get_settings",
]
