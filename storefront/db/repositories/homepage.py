# storefront/db/repositories/homepage.py
from typing import Any, Dict, List

from storefront.db.store import DataStore, Order, eq

Row = Dict[str, Any]


async def get_active_sections(store: DataStore) -> List[Row]:
    result = await store.select(
        "homepage_sections",
        filters=(eq("is_active", True),),
        order=(Order(column="display_order"), Order(column="id")),
    )
    return result.rows


async def get_active_section_items(store: DataStore) -> List[Row]:
    result = await store.select(
        "homepage_section_items",
        filters=(eq("is_active", True),),
        order=(Order(column="section_id"), Order(column="display_order"), Order(column="id")),
    )
    return result.rows
