from typing import Optional

from fastapi import APIRouter, Path, Query

from zavy.services.catalog_service import CatalogService

router = APIRouter(prefix="/api", tags=["catalog"])
catalog_service = CatalogService()


@router.get("/categories")
def list_categories():
    return [{"id": c.id, "name": c.name} for c in catalog_service.list_categories()]


@router.get("/categories/{category_id}")
def get_category(category_id: int = Path(..., ge=1)):
    category = catalog_service.get_category(category_id)
    if not category:
        return None
    return {"id": category.id, "name": category.name}


@router.get("/products/sellable")
def sellable_products(category: Optional[int] = Query(None, ge=1), q: str = ""):
    return [p.as_dict() for p in catalog_service.sellable_products(category_id=category, search_term=q)]
