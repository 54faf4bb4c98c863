"""Application configuration using Pydantic Settings."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

DEFAULT_PLANS_FILE = Path(__file__).resolve().parent.parent / "plans" / "plans.yaml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "postgresql+asyncpg://localhost:5432/client_registry"
    """PostgreSQL connection URL (asyncpg driver)."""

    create_schema: bool = False
    """Create the clients table on startup if it does not exist."""

    # Plan catalog
    plans_file: Path = DEFAULT_PLANS_FILE
    """YAML file holding the plan catalog. Loaded once at startup."""

    # Error Tracking
    sentry_dsn: str | None = None
    """Sentry DSN for error tracking. Optional."""

    # Environment
    environment: str = "development"
    """Current environment (development, staging, production)."""

    debug: bool = False
    """Enable debug mode."""

    log_format: str | None = None
    """Logging format override (json or console). Defaults by environment."""

    # NoDecode prevents pydantic-settings from forcing JSON parsing at the
    # env-source layer, so we can accept either JSON arrays or CSV strings.
    cors_origins: Annotated[list[str], NoDecode] = DEFAULT_CORS_ORIGINS
    """Origins allowed to call the API from a browser."""

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: object) -> list[str]:
        """Parse CORS origins from JSON array, CSV, or list."""
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return DEFAULT_CORS_ORIGINS.copy()

            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None

            if isinstance(decoded, list):
                return _normalize_origins(decoded)
            if isinstance(decoded, str):
                text = decoded
            elif decoded is not None:
                raise ValueError(
                    "CORS_ORIGINS must be a JSON array or comma-separated string."
                )

            # Fallback: comma-separated values
            parsed = [item.strip() for item in text.split(",")]
            return _normalize_origins(parsed)

        if isinstance(value, (list, tuple, set)):
            return _normalize_origins(value)

        raise ValueError("CORS_ORIGINS must be a string, list, tuple, or set.")


def _normalize_origins(values: Iterable[object]) -> list[str]:
    """Normalize and dedupe origins while preserving declaration order."""
    normalized: list[str] = []
    seen: set[str] = set()
    for raw_item in values:
        item = str(raw_item).strip().strip("'").strip('"').rstrip("/")
        if not item or item in seen:
            continue
        normalized.append(item)
        seen.add(item)

    if not normalized:
        return DEFAULT_CORS_ORIGINS.copy()
    return normalized


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    root_error = str(exc)
    suggestions = [
        "Check DATABASE_URL and PLANS_FILE.",
        "Allowed values for CORS_ORIGINS are:",
        '  1) ["http://localhost:3000","http://127.0.0.1:3000"]',
        "  2) http://localhost:3000,http://127.0.0.1:3000",
    ]

    raise RuntimeError(
        "Failed to initialize application settings. "
        f"Check environment variables in {env_file.resolve() if env_file.exists() else '.env'}.\n"
        + f"Error: {root_error}\n"
        + "\n".join(suggestions)
    ) from exc
