"""
Ownergraph configuration management using pydantic-settings.

All crawl fan-out caps and data source limits are configurable here.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # NYC Open Data (Socrata)
    socrata_base_url: str = Field(
        default="https://data.cityofnewyork.us/resource",
        description="Base URL of the NYC Open Data SODA API",
    )
    socrata_app_token: Optional[str] = Field(
        default=None,
        description="Socrata application token (raises the anonymous throttle)",
    )
    socrata_timeout_seconds: float = Field(
        default=15.0, description="Per-request timeout for SODA queries"
    )
    socrata_requests_per_window: int = Field(
        default=20, description="Outbound SODA requests allowed per window"
    )
    socrata_window_seconds: float = Field(
        default=1.0, description="Outbound rate limit window in seconds"
    )
    socrata_max_retry_attempts: int = Field(
        default=3, description="Attempts when the server answers HTTP 429"
    )

    # Dataset identifiers
    hpd_registrations_dataset: str = Field(
        default="tesw-yqqr", description="HPD Multiple Dwelling Registrations"
    )
    hpd_contacts_dataset: str = Field(
        default="feu5-w2e2", description="HPD Registration Contacts"
    )
    pluto_dataset: str = Field(default="64uk-42ks", description="MapPLUTO tax lots")

    # Per-query row limits
    hpd_registrations_per_property: int = Field(default=5)
    hpd_contacts_per_registration: int = Field(default=20)
    hpd_contacts_per_name: int = Field(default=30)
    hpd_contacts_per_address: int = Field(default=15)
    hpd_registration_batch_rows: int = Field(default=50)
    pluto_lots_per_query: int = Field(default=30)

    # Crawl limits
    crawl_max_depth: int = Field(default=2, description="Default number of crawl rounds")
    crawl_max_property_tasks: int = Field(
        default=8, description="Property tasks expanded per round"
    )
    crawl_max_name_tasks: int = Field(
        default=5, description="Name tasks expanded per round"
    )
    crawl_max_shared_addresses: int = Field(
        default=1, description="Shared-address expansions per name task"
    )
    crawl_registration_batch_size: int = Field(
        default=10, description="Registrations fetched per name task"
    )
    crawl_deadline_seconds: float = Field(
        default=60.0, description="Wall-clock budget per crawl (0 disables)"
    )

    # API
    api_rate_limit: str = Field(
        default="30/minute", description="slowapi limit for portfolio requests"
    )
    api_max_depth: int = Field(
        default=4, description="Largest max_depth accepted from API callers"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator(
        "socrata_requests_per_window",
        "hpd_registrations_per_property",
        "hpd_contacts_per_registration",
        "hpd_contacts_per_name",
        "hpd_contacts_per_address",
        "hpd_registration_batch_rows",
        "pluto_lots_per_query",
        "crawl_max_depth",
        "crawl_max_property_tasks",
        "crawl_max_name_tasks",
        "crawl_registration_batch_size",
        "api_max_depth",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("crawl_max_shared_addresses", "crawl_deadline_seconds")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Global settings instance
settings = Settings()
