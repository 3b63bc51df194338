"""
Configuration Management

Settings for the Fastmail client, loaded from environment variables
(and an optional .env file) with pydantic-settings.
"""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from masked_fastmail.models import AliasState

DEFAULT_API_URL = "https://api.fastmail.com/jmap/api/"
ENV_ACCOUNT_ID = "FASTMAIL_ACCOUNT_ID"
ENV_API_KEY = "FASTMAIL_API_KEY"


class Settings(BaseSettings):
    """Fastmail settings loaded from FASTMAIL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FASTMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # .env may hold variables for other tools
    )

    # ============================================================
    # Credentials (required before any request is made)
    # ============================================================
    account_id: Optional[str] = Field(None, description="Fastmail JMAP account id")
    api_key: Optional[str] = Field(None, description="Fastmail API token with masked email scope")

    # ============================================================
    # API Configuration
    # ============================================================
    api_url: str = Field(DEFAULT_API_URL, description="JMAP API endpoint")
    timeout: float = Field(30.0, description="HTTP timeout in seconds")

    # ============================================================
    # New alias defaults
    # ============================================================
    alias_description: str = Field("", description="Description stored on newly created aliases")
    new_alias_state: AliasState = Field(
        AliasState.ENABLED,
        description="State requested for newly created aliases (enabled or pending)"
    )

    @field_validator("new_alias_state")
    @classmethod
    def _creatable_state(cls, value: AliasState) -> AliasState:
        if value not in (AliasState.ENABLED, AliasState.PENDING):
            raise ValueError("new aliases can only be created as 'enabled' or 'pending'")
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(self.account_id and self.api_key)


def get_settings() -> Settings:
    """Load settings fresh from the environment."""
    return Settings()
