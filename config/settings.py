from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: Optional[str] = ""
    PERPLEXITY_API_KEY: Optional[str] = ""
    SERPAPI_KEY: Optional[str] = ""

    # Application Settings
    APP_NAME: str = "AI Brand Visibility Audit"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Provider Settings
    CHATGPT_MODEL: str = "gpt-4o-mini"
    PERPLEXITY_MODEL: str = "sonar"
    PERPLEXITY_API_URL: str = "https://api.perplexity.ai/chat/completions"
    SERPAPI_URL: str = "https://serpapi.com/search.json"
    SERPAPI_COUNTRY: str = "in"  # Google "gl" parameter
    SERPAPI_LANGUAGE: str = "en"  # Google "hl" parameter
    PROVIDER_TEMPERATURE: float = 0.3
    PROVIDER_MAX_TOKENS: int = 1000
    PROVIDER_TIMEOUT: float = 15.0  # seconds, per upstream call
    PROVIDER_MAX_RETRIES: int = 2
    PROVIDER_RETRY_DELAY: float = 1.0  # seconds

    # Audit Settings
    MAX_CONCURRENT_QUERIES: int = 5
    AUDIT_TIMEOUT_SECONDS: float = 60.0
    DAILY_AUDIT_LIMIT: int = 20

    # Redis Settings
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    REDIS_CACHE_TTL: int = 86400  # 24 hour provider response cache
    REDIS_AUDIT_TTL: int = 2592000  # 30 days for stored audits
    REDIS_MAX_CONNECTIONS: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
