from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    APP_NAME: str = "Game Catalog Service"
    DATABASE_URL: str
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    CLIENT_URL: str = "http://localhost:3000"
    STATIC_DIR: Optional[str] = None
    QUERY_TIMEOUT_SECONDS: float = 10.0
    DB_POOL_SIZE: int = 5
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL")
    @classmethod
    def use_async_driver(cls, value: str) -> str:
        """Accept plain postgres:// URLs and point them at the asyncpg driver."""
        for prefix in ("postgres://", "postgresql://"):
            if value.startswith(prefix):
                return "postgresql+asyncpg://" + value[len(prefix):]
        return value

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CLIENT_URL.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
