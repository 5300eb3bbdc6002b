from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    WELLUM_DATABASE_URL: str = "sqlite+aiosqlite:///./wellum.db"

    SERVICE_NAME: str = "wellum-service"
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.0

    SESSION_TICK_SECONDS: float = 1.0
    # Live sessions with no request for this long are closed and dropped
    SESSION_IDLE_TIMEOUT_SECONDS: float = 30 * 60
    SESSION_REAP_INTERVAL_SECONDS: float = 60.0

    CORS_ORIGINS: str = "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_dev(self) -> bool:
        return self.APP_ENV in {"local", "dev"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
