"""Configuration system for custody core.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for case sessions.

Usage:
    from custody_core.config import load_config

    # Load from environment variables and .env file
    config = load_config()

    # Defaults applied to new draft child records
    print(config.drafts.p1_percent)

    if config.is_debug:
        print("Debug logging enabled")
"""

from decimal import Decimal
from typing import Any

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import YesNo


class DraftDefaults(BaseSettings):
    """Initial values for new draft child records.

    Environment Variables:
        CUSTODY_DRAFT_P1_PERCENT: P1 overnights percent for a new child (0-100)
        CUSTODY_DRAFT_PERCENT_OF_YEAR_ELIGIBLE: Care credit eligible share of year
        CUSTODY_DRAFT_SUPPORT_ELIGIBLE: Initial child support eligibility (YES/NO)
        CUSTODY_DRAFT_ELIGIBLE_CHILD_TAX_CREDIT: Initial CTC flag
        CUSTODY_DRAFT_ELIGIBLE_OTHER_DEPENDENT_TAX_CREDIT: Initial ODC flag
        CUSTODY_DRAFT_ELIGIBLE_EIC: Initial EIC flag
    """

    model_config = SettingsConfigDict(
        env_prefix="CUSTODY_DRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    p1_percent: int = Field(
        default=50,
        ge=0,
        le=100,
        description="P1 overnights percent for a new child",
    )
    percent_of_year_eligible: Decimal = Field(
        default=Decimal("100"),
        ge=0,
        le=100,
        description="Share of the year a new child is care-credit eligible",
    )
    support_eligible: YesNo = Field(
        default=YesNo.YES,
        description="Initial child support eligibility",
    )
    eligible_child_tax_credit: bool = True
    eligible_other_dependent_tax_credit: bool = False
    eligible_eic: bool = True


class CustodyCoreConfig(BaseSettings):
    """Root configuration for custody core.

    Environment Variables:
        CUSTODY_ENV: Environment name (development, staging, production, test)
        CUSTODY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        CUSTODY_LOG_FORMAT: Log renderer (console or json)

    Example:
        config = CustodyCoreConfig(
            log_level="DEBUG",
            drafts=DraftDefaults(p1_percent=60),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="CUSTODY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="console",
        description="Log renderer: console or json",
    )

    drafts: DraftDefaults = Field(default_factory=DraftDefaults)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log renderer name."""
        v_lower = v.lower().strip()
        if v_lower not in {"console", "json"}:
            raise ValueError(f"Invalid log format: {v}. Must be console or json")
        return v_lower

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def load_config(**overrides: Any) -> CustodyCoreConfig:
    """
    Load configuration from the environment, applying keyword overrides.

    Raises:
        ConfigurationError: If any setting fails validation
    """
    try:
        return CustodyCoreConfig(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg', str(e))}",
            config_key=key or None,
            expected=first.get("type"),
            actual=first.get("input"),
        ) from e


__all__ = ["DraftDefaults", "CustodyCoreConfig", "load_config"]
