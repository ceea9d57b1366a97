"""
mtengines - Configuration Module
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Library settings, read from MT_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="MT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP Settings
    PROXY_URL: Optional[str] = None
    HTTP_TIMEOUT: float = 60.0

    # LLM Settings
    OPENAI_MODEL: str = "gpt-4o-mini"
    ANTHROPIC_MODEL: str = "claude-3-5-sonnet-20241022"
    ANTHROPIC_MAX_TOKENS: int = 1024  # Claude requires an explicit limit

    # Provider credentials (optional, explicit keys always win)
    AZURE_API_KEY: Optional[str] = None
    AZURE_REGION: Optional[str] = None
    GOOGLE_API_KEY: Optional[str] = None
    YANDEX_API_KEY: Optional[str] = None
    DEEPL_API_KEY: Optional[str] = None
    MODERNMT_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None
    ANTHROPIC_API_KEY: Optional[str] = None
    ALIBABA_API_KEY: Optional[str] = None
    MISTRAL_API_KEY: Optional[str] = None


settings = Settings()
