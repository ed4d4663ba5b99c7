"""Application configuration loaded from the environment."""

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

_DEFAULT_BUCKETS = [0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0]


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- Database ---
    # Credentials belong in the environment, never in this file.
    DATABASE_URL: str = "sqlite:///./inventory.db"
    ASYNC_DATABASE_URL: str | None = None
    CREATE_TABLES_ON_STARTUP: bool = True

    # --- Server ---
    PROJECT_NAME: str = "Inventory Ledger API"
    PORT: int = 3000
    GREETING: str = "Hello World!"
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # --- Observability ---
    LOG_LEVEL: str = "INFO"
    METRICS_ENABLED: bool = True
    METRICS_NAMESPACE: str = "inventory_ledger"
    METRICS_LATENCY_BUCKETS: Annotated[list[float], NoDecode] = Field(default_factory=lambda: list(_DEFAULT_BUCKETS))

    @staticmethod
    def _split_list(value: str | list[str] | None) -> list[str]:
        if not value:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return [item for item in value if isinstance(item, str) and item.strip()]

    @staticmethod
    def _split_float_list(value: str | list[float] | None) -> list[float]:
        if value is None:
            return []
        items = value.split(",") if isinstance(value, str) else value
        floats: list[float] = []
        for item in items:
            try:
                floats.append(float(item))
            except (TypeError, ValueError):
                continue
        return floats

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def validate_origins(cls, value: str | list[str] | None) -> list[str]:
        return cls._split_list(value) or ["*"]

    @field_validator("METRICS_LATENCY_BUCKETS", mode="before")
    @classmethod
    def validate_metric_buckets(cls, value: str | list[float] | None) -> list[float]:
        return cls._split_float_list(value) or list(_DEFAULT_BUCKETS)

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("PORT must be between 1 and 65535.")
        return value

    @model_validator(mode="after")
    def ensure_async_database_url(self) -> "Settings":
        """Ensure an async URL is always available."""
        if not self.ASYNC_DATABASE_URL:
            self.ASYNC_DATABASE_URL = self._derive_async_url(self.DATABASE_URL)
        if not self.ASYNC_DATABASE_URL:
            raise ValueError(f"Could not derive async database URL from: {self.DATABASE_URL}")
        return self

    @staticmethod
    def _derive_async_url(url: str | None) -> str | None:
        """Best-effort conversion from sync to async driver."""
        if not url:
            return None
        if "+asyncpg" in url or "+aiosqlite" in url:
            return url
        if url.startswith("sqlite:"):
            return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
        if "://" not in url:
            return url

        scheme, rest = url.split("://", 1)
        if scheme.startswith("postgres"):
            return f"postgresql+asyncpg://{rest}"
        return url


settings = Settings()
