"""Helpers to render product media and prices."""
from __future__ import annotations

from typing import Optional

CLOUDINARY_BASE = "https://res.cloudinary.com"


def cloudinary_url(
    image_meta: str,
    *,
    cloud_name: str,
    transformations: Optional[str] = None,
    fmt: str = "jpg",
    use_version: bool = True,
) -> str:
    """
    Monta a URL de entrega a partir do meta "<versao>/<public_id>".
    Com use_version=False o segmento de versao e omitido (evita 404 de cache antigo).
    """
    version, _, public_id = (image_meta or "").partition("/")
    tx = f"{transformations}/" if transformations else ""
    v_seg = f"v{version}/" if use_version else ""
    return f"{CLOUDINARY_BASE}/{cloud_name}/image/upload/{tx}{v_seg}{public_id}.{fmt or 'jpg'}"


def price_label(price_in_cents: int | None) -> str:
    cents = int(price_in_cents or 0)
    reais, rest = divmod(abs(cents), 100)
    integer = f"{reais:,}".replace(",", ".")
    sign = "-" if cents < 0 else ""
    return f"{sign}R$ {integer},{rest:02d}"
