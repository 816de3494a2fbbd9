"""Slides exibidos no carrossel da home."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Slide:
    image_url: str
    alt: str
    href: Optional[str] = None


DEFAULT_SLIDES: tuple[Slide, ...] = (
    Slide("https://placehold.co/1600x360/0c7/fff?text=Frete+Gr%C3%A1tis+%7C+Pedidos+%3E+R%24250", "Frete Grátis"),
    Slide("https://placehold.co/1600x360/07a/fff?text=Novidades+para+Pets", "Novidades"),
    Slide("https://placehold.co/1600x360/b60/fff?text=Promo%C3%A7%C3%B5es+da+Semana", "Promoções"),
    Slide("https://placehold.co/1600x360/333/fff?text=Cuidados+e+Higiene+Pet", "Cuidados Pet"),
)

BANNER_HEIGHT_PX = 280
AUTOPLAY_DELAY_MS = 4000
