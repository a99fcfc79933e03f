# storefront/api/v1/routes_products.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.core.config import settings
from storefront.db.base import get_store
from storefront.db.store import DataStore
from storefront.domain.catalog.schemas import CatalogQuery, ProductPage, ProductWithDetails, SortOption
from storefront.domain.catalog.service import CatalogQueryEngine, get_product


router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("", response_model=ProductPage)
async def list_products_endpoint(
    category: Optional[str] = None,
    best_seller: Optional[bool] = None,
    on_sale: Optional[bool] = None,
    q: Optional[str] = None,
    sort: SortOption = SortOption.NEWEST,
    page: int = Query(0, ge=0),
    page_size: Optional[int] = Query(None, ge=1),
    store: DataStore = Depends(get_store),
):
    # public listings are always restricted to published products
    criteria = CatalogQuery(
        category_slug=category,
        is_best_seller=best_seller,
        is_on_sale=on_sale,
        search_text=q,
        sort=sort,
        page=page,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
    )
    return await CatalogQueryEngine(store).query(criteria)


@router.get("/{product_id}", response_model=ProductWithDetails)
async def get_product_endpoint(
    product_id: str,
    store: DataStore = Depends(get_store),
):
    return await get_product(store, product_id)
