"""Application configuration using pydantic-settings."""
from __future__ import annotations

from decimal import Decimal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuration values for the ledger core and its surfaces."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGERCORE_", env_file=".env", env_file_encoding="utf-8"
    )

    app_name: str = Field(default="Ledger Core")
    balance_epsilon: Decimal = Field(
        default=Decimal("0.01"),
        gt=0,
        description="Largest debit/credit difference still treated as rounding noise.",
    )
    cash_flow_months: int = Field(default=12, ge=1, le=120)
    display_precision: Decimal = Field(
        default=Decimal("0.01"),
        description="Quantum applied to monetary values when they leave the process.",
    )
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _uppercase_level(cls, value: str) -> str:
        return value.upper()


_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Return a cached instance of the application settings."""

    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


__all__ = ["AppSettings", "get_settings"]
