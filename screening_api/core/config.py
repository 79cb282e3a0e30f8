
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "services.json"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Screening Package API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    # Service catalog
    catalog_path: str = Field(default=str(_DEFAULT_CATALOG), alias="CATALOG_PATH")
    pricing_rules_path: str | None = Field(
        default=None, alias="PRICING_RULES_PATH",
    )  # JSON with volume_tiers / bundles; built-in defaults when unset

    # Database (SQLite via aiosqlite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./packages_dev.db",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=True, alias="AUTO_CREATE_TABLES",
    )  # local dev only; use alembic migrations elsewhere

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
