from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # Storage settings
    STORAGE_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20
    REDIS_SOCKET_TIMEOUT: float = 10.0

    # Collection keys in the shared text store
    PEOPLE_KEY: str = "donorlink:people"
    MESSAGES_KEY: str = "donorlink:messages"

    # Pub/sub channel carrying change notifications between processes
    CHANGE_CHANNEL: str = "donorlink:changes"

    # =================================================================
    # DOMAIN SETTINGS
    # =================================================================
    SEED_DEMO_DATA: bool | None = None
    DONATION_COOLDOWN_MONTHS: int = 4
    TEMPORARY_PASSWORD_LENGTH: int = 8
    PASSWORD_MIN_LENGTH: int = 6

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def should_seed_demo_data(self) -> bool:
        """Seed demo accounts unless told otherwise; defaults on only for development."""
        if self.SEED_DEMO_DATA is not None:
            return self.SEED_DEMO_DATA
        return self.environment == "development"

    def get_redis_pool_config(self) -> dict:
        """
        Get Redis connection pool configuration.
        Adjust environment-specific settings based on self.environment.
        """
        config = {
            "max_connections": self.REDIS_MAX_CONNECTIONS,
            "socket_connect_timeout": self.REDIS_SOCKET_TIMEOUT,
            "socket_timeout": self.REDIS_SOCKET_TIMEOUT,
        }

        if self.environment == "development":
            # Local Redis answers fast, keep the pool small
            config.update({"max_connections": min(self.REDIS_MAX_CONNECTIONS, 5)})

        return config


settings = Settings()
