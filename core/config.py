from functools import lru_cache

from fastapi import Request
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = "sqlite:///./app.db"

    # No default: the app must not boot without a signing secret
    JWT_SECRET: str = Field(min_length=1)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 12
    BCRYPT_ROUNDS: int = 10

    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PATH: str = "/uploads"
    DEPLOYED_URL_PATH: str = "/deployed"

    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was constructed with."""
    return request.app.state.settings
