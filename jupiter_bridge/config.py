"""
Configuration for the Jupiter bridge.

Settings are loaded from environment variables (and an optional ``.env``
file) with Pydantic v2 BaseSettings.

Usage:
    from jupiter_bridge.config import get_settings
    profile = get_settings().jupiter.to_profile()
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import AnyHttpUrl, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .transport import (
    DEFAULT_BASE_URLS,
    ApiTier,
    IntegratorFee,
    TransportProfile,
    YellowstoneConfig,
)
from .validators import MAX_FEE_BPS, MAX_SLIPPAGE_BPS


# =============================================================================
# ENUMS
# =============================================================================

class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# =============================================================================
# BASE CONFIGURATION
# =============================================================================

class BaseConfig(BaseSettings):
    """Base configuration with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


# =============================================================================
# JUPITER CONFIGURATION
# =============================================================================

class JupiterSettings(BaseConfig):
    """Jupiter aggregator access configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JUPITER_",
        env_file=".env",
        extra="ignore",
    )

    tier: ApiTier = Field(
        default=ApiTier.PUBLIC,
        description="Access tier: public, pro, lite, self-hosted or ultra",
    )

    api_url: Optional[AnyHttpUrl] = Field(
        default=None,
        description="Base URL override (required for self-hosted)",
    )

    api_key: Optional[SecretStr] = Field(
        default=None,
        description="Bearer API key (required for pro and ultra)",
    )

    integrator_fee_bps: Optional[int] = Field(
        default=None,
        ge=0,
        le=MAX_FEE_BPS,
        description="Integrator fee in basis points",
    )

    integrator_fee_account: Optional[str] = Field(
        default=None,
        description="Account that receives the integrator fee",
    )

    yellowstone_endpoint: Optional[str] = Field(
        default=None,
        description="Yellowstone gRPC endpoint for self-hosted deployments",
    )

    yellowstone_token: Optional[SecretStr] = Field(
        default=None,
        description="Yellowstone x-token",
    )

    default_slippage_bps: int = Field(
        default=50,
        ge=0,
        le=MAX_SLIPPAGE_BPS,
        description="Default slippage tolerance in basis points",
    )

    strict_routes: bool = Field(
        default=True,
        description="Reject quotes whose hop percentages do not sum to 100",
    )

    @model_validator(mode="after")
    def validate_pairs(self) -> "JupiterSettings":
        """Both halves of the integrator fee and of the Yellowstone feed are required together."""
        if (self.integrator_fee_bps is None) != (self.integrator_fee_account is None):
            raise ValueError(
                "integrator_fee_bps and integrator_fee_account must be set together"
            )
        if (self.yellowstone_endpoint is None) != (self.yellowstone_token is None):
            raise ValueError(
                "yellowstone_endpoint and yellowstone_token must be set together"
            )
        return self

    @property
    def base_url(self) -> Optional[str]:
        if self.api_url is not None:
            return str(self.api_url)
        return DEFAULT_BASE_URLS.get(self.tier)

    def to_profile(self) -> TransportProfile:
        """
        Build the transport profile these settings describe.

        Raises:
            ConfigurationError: If the tier requirements are not met
        """
        integrator_fee = None
        if self.integrator_fee_bps is not None:
            integrator_fee = IntegratorFee(self.integrator_fee_bps, self.integrator_fee_account)

        yellowstone = None
        if self.yellowstone_endpoint is not None:
            yellowstone = YellowstoneConfig(
                grpc_endpoint=self.yellowstone_endpoint,
                x_token=self.yellowstone_token.get_secret_value(),
            )

        return TransportProfile(
            base_url=self.base_url or "",
            tier=self.tier,
            api_key=self.api_key.get_secret_value() if self.api_key else None,
            integrator_fee=integrator_fee,
            yellowstone=yellowstone,
        )


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

class LoggingSettings(BaseConfig):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        extra="ignore",
    )

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )

    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format",
    )

    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Log date format",
    )

    file_enabled: bool = Field(
        default=False,
        description="Enable file logging",
    )

    file_path: Path = Field(
        default=Path("logs/jupiter_bridge.log"),
        description="Log file path",
    )

    file_max_bytes: int = Field(
        default=10 * 1024 * 1024,  # 10 MB
        ge=1024,
        description="Max log file size in bytes",
    )

    file_backup_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Number of backup log files",
    )


# =============================================================================
# APPLICATION SETTINGS (MAIN)
# =============================================================================

class Settings(BaseConfig):
    """
    Application settings aggregating all configuration sections.

    Usage:
        settings = get_settings()
        profile = settings.jupiter.to_profile()
    """

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    jupiter: JupiterSettings = Field(default_factory=JupiterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def mask_secrets(self) -> dict[str, Any]:
        """
        Return settings dict with sensitive values masked.
        Safe for logging and debugging.
        """
        def mask_value(v: Any) -> Any:
            if isinstance(v, SecretStr):
                secret = v.get_secret_value()
                if len(secret) > 8:
                    return f"{secret[:4]}...{secret[-4:]}"
                return "***"
            elif isinstance(v, dict):
                return {k: mask_value(val) for k, val in v.items()}
            elif isinstance(v, (list, tuple)):
                return type(v)(mask_value(item) for item in v)
            return v

        return mask_value(self.model_dump())


# =============================================================================
# SINGLETON & CACHING
# =============================================================================

@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """
    Clear settings cache and reload from environment.

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "Settings",
    "JupiterSettings",
    "LoggingSettings",
    "LogLevel",
    "get_settings",
    "reload_settings",
]
