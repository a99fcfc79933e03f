# storefront/db/repositories/catalog.py
from typing import Any, Dict, List, Optional, Sequence

from storefront.db.store import DataStore, Order, Predicate, SelectResult, eq

Row = Dict[str, Any]

PRODUCTS_VIEW = "products_with_details"

ELIGIBLE = (eq("is_visible", True), eq("status", "published"))
BY_DISPLAY_ORDER = (Order(column="display_order"), Order(column="id"))


async def select_products(
    store: DataStore,
    filters: Sequence[Predicate],
    order: Sequence[Order],
    offset: int,
    limit: int,
) -> SelectResult:
    return await store.select(
        PRODUCTS_VIEW,
        filters=filters,
        order=order,
        offset=offset,
        limit=limit,
        count=True,
    )


async def get_product_by_id(store: DataStore, product_id: str) -> Optional[Row]:
    result = await store.select(
        PRODUCTS_VIEW,
        filters=(eq("id", product_id), *ELIGIBLE),
        limit=1,
    )
    return result.rows[0] if result.rows else None


async def get_eligible_products(store: DataStore, limit: Optional[int] = None) -> List[Row]:
    result = await store.select(PRODUCTS_VIEW, filters=ELIGIBLE, order=BY_DISPLAY_ORDER, limit=limit)
    return result.rows


async def get_eligible_product_categories(store: DataStore) -> List[Row]:
    """category_id of every eligible product, used for per-category counts."""
    result = await store.select("products", filters=ELIGIBLE)
    return result.rows


async def get_visible_categories(store: DataStore) -> List[Row]:
    result = await store.select("categories", filters=(eq("is_visible", True),), order=BY_DISPLAY_ORDER)
    return result.rows


async def get_category_by_slug(store: DataStore, slug: str) -> Optional[Row]:
    result = await store.select(
        "categories",
        filters=(eq("slug", slug), eq("is_visible", True)),
        limit=1,
    )
    return result.rows[0] if result.rows else None


async def get_visible_occasions(store: DataStore) -> List[Row]:
    result = await store.select("occasions", filters=(eq("is_visible", True),), order=BY_DISPLAY_ORDER)
    return result.rows


async def get_all_occasions(store: DataStore) -> List[Row]:
    result = await store.select("occasions")
    return result.rows


async def get_product_occasions(store: DataStore) -> List[Row]:
    result = await store.select("product_occasions")
    return result.rows
