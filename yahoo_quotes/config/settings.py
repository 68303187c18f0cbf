import os
from functools import lru_cache

from pydantic import BaseModel, field_validator

DEFAULT_BASE_URL = "http://download.finance.yahoo.com/d/quotes.csv"


class Settings(BaseModel):
    YAHOO_QUOTES_BASE_URL: str = DEFAULT_BASE_URL
    YAHOO_QUOTES_TIMEOUT_SEC: float = 5.0

    @field_validator("YAHOO_QUOTES_TIMEOUT_SEC")
    @classmethod
    def _timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        raw: dict[str, str] = {}
        base_url = os.getenv("YAHOO_QUOTES_BASE_URL", "").strip()
        if base_url:
            raw["YAHOO_QUOTES_BASE_URL"] = base_url
        timeout = os.getenv("YAHOO_QUOTES_TIMEOUT_SEC", "").strip()
        if timeout:
            raw["YAHOO_QUOTES_TIMEOUT_SEC"] = timeout
        return cls.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
