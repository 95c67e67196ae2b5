from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    # Backend REST service
    API_URL: str = "http://localhost:3000"
    API_TOKEN: str | None = None
    API_TIMEOUT: float = 10.0

    LOG_LEVEL: str = "INFO"

    # Key under which a pending selection survives a login redirect
    SELECTION_STORAGE_KEY: str = "selection:pending"

    DEFAULT_PAYMENT_METHOD: str = "checkout-pro"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def api_base_url(self) -> str:
        return self.API_URL.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
