"""
Utility helpers shared across routers/services.
"""

from typing import Optional

from .config import get_settings


def absolute_url(path: str, base: Optional[str] = None) -> str:
    """
    Converte caminhos relativos em URLs absolutas usando PUBLIC_BASE_URL.
    """
    base_url = (base or get_settings().public_base_url).rstrip("/")
    if not path:
        return base_url + "/"
    if path.startswith(("http://", "https://")):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path


def sanitized(payload: dict, keys: tuple[str, ...]) -> dict:
    """Subset of a request body that is safe to log (never credentials)."""
    source = payload if isinstance(payload, dict) else {}
    return {key: source.get(key) for key in keys}
