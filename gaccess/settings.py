# gaccess/settings.py
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="G-access")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # upstream generative-text API
    GEMINI_API_KEY: str | None = None
    GEMINI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash-lite")
    REQUEST_TIMEOUT_SECONDS: float = Field(default=120.0, gt=0)

    # shared secret for the relay
    PROXY_SECRET_TOKEN: str | None = None

    # article orchestrator; no RELAY_URL means the relay runs in-process
    RELAY_URL: str | None = None
    CHAPTER_DELAY_SECONDS: float = Field(default=0.5, ge=0)
    MAX_CHAPTERS: int = Field(default=8, ge=1, le=8)

    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def generate_content_url(self) -> str:
        base = self.GEMINI_BASE_URL.rstrip("/")
        return f"{base}/models/{self.GEMINI_MODEL}:generateContent"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests override it with their own Settings."""
    return settings
