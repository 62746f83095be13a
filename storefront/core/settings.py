from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    APP_TITLE: str = Field("storefront-api")
    APP_VERSION: str = Field("0.1.0")
    LOG_LEVEL: str = Field("INFO")
    HOST: str = Field("0.0.0.0")
    PORT: int = Field(3000)
    CORS_ORIGINS: str = Field("*", description="Comma separated list, '*' = any origin")

    # DB
    DATABASE_URL: str = Field("sqlite:///./storefront.db", description="postgresql+psycopg://user:<PASS>@db:5432/storefront")
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 1800  # sec
    SQLALCHEMY_CREATE_ALL: bool = True
    ALEMBIC_CONFIG: str = "alembic.ini"

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
