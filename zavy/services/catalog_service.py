"""Catalog read use cases: categories and sellable products for the carousels."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from zavy.core.config import get_settings
from zavy.db.models import Category, Product
from zavy.domain.media import cloudinary_url, price_label
from zavy.repositories.sql_repository import SQLRepository

CARD_TRANSFORMATIONS = "f_auto,q_auto"


@dataclass
class CategoryView:
    id: int
    name: str


@dataclass
class ProductCard:
    id: int
    title: str
    description: str
    price_in_cents: int
    price: str
    image_url: str
    category_id: Optional[int]

    def as_dict(self) -> dict:
        return asdict(self)


class CatalogService:
    def __init__(self) -> None:
        self.repository = SQLRepository()

    def _category_view(self, entity: Category) -> CategoryView:
        return CategoryView(id=entity.id, name=entity.name)

    def _product_card(self, entity: Product) -> ProductCard:
        return ProductCard(
            id=entity.id,
            title=entity.title,
            description=entity.description or "",
            price_in_cents=int(entity.price_in_cents or 0),
            price=price_label(entity.price_in_cents),
            image_url=cloudinary_url(
                entity.image,
                cloud_name=get_settings().cloudinary_cloud_name,
                transformations=CARD_TRANSFORMATIONS,
            ),
            category_id=entity.category_id,
        )

    def list_categories(self) -> list[CategoryView]:
        return [self._category_view(c) for c in self.repository.list_categories()]

    def get_category(self, category_id: int) -> Optional[CategoryView]:
        if category_id < 1:
            raise ValueError("category id must be >= 1")
        entity = self.repository.get_category(category_id)
        return self._category_view(entity) if entity else None

    def sellable_products(self, category_id: int | None = None, search_term: str | None = None) -> list[ProductCard]:
        products = self.repository.list_sellable_products(category_id=category_id, search_term=search_term)
        return [self._product_card(p) for p in products]
