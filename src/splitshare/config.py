from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SPLITSHARE_",
        case_sensitive=False,
        extra="ignore",
    )

    default_currency: str = Field("USD")
    min_participants: int = Field(2, ge=1)
    min_shares: int = Field(1, ge=1)
    max_shares: int = Field(10, ge=1)
    amount_tolerance: Decimal = Field(Decimal("0.01"), gt=0)
    percentage_tolerance: Decimal = Field(Decimal("0.1"), gt=0)
    debounce_ms: int = Field(100, ge=0)
    max_amount: Decimal = Field(Decimal("1000000000000"), gt=0, le=Decimal("1000000000000000"))
    tz: str = Field("UTC")
    log_level: str = Field("INFO")
    log_json: bool = Field(True)

    @model_validator(mode="after")
    def _check_share_bounds(self) -> "Settings":
        if self.max_shares < self.min_shares:
            raise ValueError("max_shares must be >= min_shares")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
