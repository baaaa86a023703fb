# app/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from the environment (and a local .env file).
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Web Studio API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./studio.db"

    # Session tokens
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Comma separated list of allowed origins
    CORS_ORIGINS: str = "*"

    # OpenAI-compatible completion API (OpenRouter)
    OPENROUTER_API_KEY: Optional[str] = None
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    DEFAULT_AI_MODEL: str = "openai/gpt-4o-mini"

    # Platform credentials for the simulated platform deploys
    VERCEL_TOKEN: Optional[str] = None
    NETLIFY_TOKEN: Optional[str] = None
    COOLIFY_TOKEN: Optional[str] = None
    COOLIFY_API_URL: str = "https://coolify.io/api/v1/deploy"

    # Seconds before a simulated deployment flips from building to success
    DEPLOY_SIMULATION_DELAY: float = 3.0
    DEPLOY_DOMAIN: str = "aiappsy.com"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
