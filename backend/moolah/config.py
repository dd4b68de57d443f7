"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Moolah"
    log_level: str = "INFO"

    # Storage
    store_backend: str = "sql"  # sql, firestore
    database_url: str = "sqlite:///./data/moolah.db"

    # Firebase (identity provider, and Firestore when store_backend=firestore)
    firebase_credentials_path: Optional[str] = None  # Falls back to application default credentials
    firebase_project_id: Optional[str] = None

    # Business rules
    require_transaction_category: bool = False
    budget_spent_within_period: bool = False
    default_currency: str = "EUR"
    seed_default_categories: bool = True

    # Pagination
    default_page_size: int = 50
    max_page_size: int = 200

    # Market data proxies
    crypto_api_url: str = "https://api.freecryptoapi.com/v1/getTop"
    crypto_api_key: Optional[str] = None
    exchange_rates_url: str = "https://api.frankfurter.dev/v1/latest"
    upstream_timeout_seconds: float = 10.0

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()


def clamp_page_size(per_page: Optional[int]) -> int:
    """Clamp a requested page size to the configured ceiling."""
    if not per_page or per_page < 1:
        return settings.default_page_size
    return min(per_page, settings.max_page_size)
