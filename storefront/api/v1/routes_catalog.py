# storefront/api/v1/routes_catalog.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends

from storefront.db.base import get_store
from storefront.db.store import DataStore
from storefront.domain.catalog.filters import filter_products
from storefront.domain.catalog.schemas import Category, CategoryWithCount, FilterState, Occasion, ShopOut
from storefront.domain.catalog.service import get_category, list_categories_with_counts, list_occasions, load_shop_catalog


router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/categories", response_model=List[CategoryWithCount])
async def list_categories_endpoint(store: DataStore = Depends(get_store)):
    return await list_categories_with_counts(store)


@router.get("/categories/{slug}", response_model=Category)
async def get_category_endpoint(slug: str, store: DataStore = Depends(get_store)):
    return await get_category(store, slug)


@router.get("/occasions", response_model=List[Occasion])
async def list_occasions_endpoint(store: DataStore = Depends(get_store)):
    return await list_occasions(store)


@router.get("/shop", response_model=ShopOut)
async def shop_endpoint(
    category: Optional[str] = None,
    occasion: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    on_sale: bool = False,
    best_seller: bool = False,
    store: DataStore = Depends(get_store),
):
    state = FilterState(
        category_slug=category,
        occasion_slug=occasion,
        min_price=min_price,
        max_price=max_price,
        on_sale=on_sale,
        best_seller=best_seller,
    )
    catalog = await load_shop_catalog(store)
    products = filter_products(catalog.products, state, catalog.occasion_map)
    return ShopOut(
        products=products,
        total=len(products),
        active_filters=state.active_count,
        categories=catalog.categories,
        occasions=catalog.occasions,
    )
