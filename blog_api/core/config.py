from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite+aiosqlite:///database.db"
    DATABASE_ECHO: bool = False

    PROJECT_NAME: str = "Blog Posts API"
    PROJECT_INFO: str = "CRUD API for blog posts"
    PROJECT_VERSION: str = "1.0.0"
    TIME_ZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
