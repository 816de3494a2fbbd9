"""
Configuration helpers for the Zavy storefront.

Routers/services read a frozen Settings object instead of touching os.environ.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    public_base_url: str
    database_url: str
    session_ttl_seconds: int
    cloudinary_cloud_name: str
    viacep_base_url: str
    viacep_timeout_seconds: float
    log_level: str
    log_file: str
    trusted_proxies: tuple[str, ...]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./zavy.db"),
        session_ttl_seconds=_int(os.getenv("SESSION_TTL_SECONDS", "2592000"), 2592000),
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        viacep_base_url=os.getenv("VIACEP_BASE_URL", "https://viacep.com.br/ws").rstrip("/"),
        viacep_timeout_seconds=_float(os.getenv("VIACEP_TIMEOUT_SECONDS", "5"), 5.0),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        trusted_proxies=tuple(p.strip() for p in os.getenv("TRUSTED_PROXIES", "").split(",") if p.strip()),
    )
