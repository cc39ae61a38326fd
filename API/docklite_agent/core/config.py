from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    DOCKER_HOST: str = Field(
        default="unix:///var/run/docker.sock",
        description="Docker Engine API endpoint (unix socket or tcp URL)"
    )
    DOCKER_TIMEOUT: float = Field(
        default=60.0,
        description="HTTP timeout in seconds for a single Docker API request"
    )

    NETWORK_NAME: str = "docklite_network"

    SITES_BASE_DIR: Path = Field(
        default=Path("/var/www/sites"),
        description="Host directory holding one folder per site domain"
    )
    SEED_SITE_FILES: bool = True

    STATIC_IMAGE: str = "nginx:alpine"
    PHP_IMAGE: str = "webdevops/php-nginx:8.2-alpine"
    NODE_IMAGE: str = "node:20-alpine"
    DATABASE_IMAGE: str = "postgres:16-alpine"

    TRAEFIK_ENTRYPOINT: str = "websecure"
    TRAEFIK_CERT_RESOLVER: str = "letsencrypt"

    # Per-call deadlines in seconds
    LIST_DEADLINE: float = 5.0
    ACTION_DEADLINE: float = 10.0
    CREATE_DEADLINE: float = 30.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3001"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DOCKLITE_",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings()
