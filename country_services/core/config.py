from functools import lru_cache
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root and .env so it loads no matter where the consumer runs from
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"

RESTCOUNTRIES_URL = "https://restcountries.com/v2"


class Settings(BaseSettings):
    # OS environment first, .env is optional; every field has a default
    model_config = SettingsConfigDict(
        env_prefix="COUNTRY_SERVICES_",
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default=RESTCOUNTRIES_URL, min_length=8)
    timeout_seconds: float = Field(default=15.0, gt=0)
    currency_fields: str = "name,currencies"


@lru_cache
def get_settings() -> Settings:
    return Settings()
