# storefront/domain/catalog/service.py
import asyncio
import logging
from collections import Counter
from typing import Dict, List, Optional, Set

from storefront.core.config import settings
from storefront.core.errors import NotFoundError
from storefront.db.repositories.catalog import (
    ELIGIBLE,
    get_all_occasions,
    get_category_by_slug,
    get_eligible_product_categories,
    get_eligible_products,
    get_product_by_id,
    get_product_occasions,
    get_visible_categories,
    get_visible_occasions,
    select_products,
)
from storefront.db.store import AnyOf, DataStore, Order, Predicate, eq, icontains
from .filters import build_occasion_map
from .schemas import (
    CatalogQuery,
    Category,
    CategoryWithCount,
    Occasion,
    ProductOccasionLink,
    ProductPage,
    ProductStatus,
    ProductWithDetails,
    ShopCatalog,
    SortOption,
)

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ("name", "name_mk", "name_en", "description", "description_mk", "description_en")

SORT_ORDERS = {
    SortOption.NEWEST: (Order(column="created_at", ascending=False),),
    SortOption.OLDEST: (Order(column="created_at", ascending=True),),
    SortOption.PRICE_ASC: (Order(column="price", ascending=True, nulls_last=True),),
    SortOption.PRICE_DESC: (Order(column="price", ascending=False, nulls_last=True),),
    SortOption.NAME_ASC: (Order(column="name", ascending=True),),
    SortOption.NAME_DESC: (Order(column="name", ascending=False),),
}

# appended to every ordering so that pages never overlap or skip rows
TIE_BREAKER = Order(column="id", ascending=True)


def build_predicates(criteria: CatalogQuery) -> List[Predicate]:
    predicates: List[Predicate] = [*ELIGIBLE]

    # status can only narrow the published set, never widen it
    if criteria.status is not None and criteria.status != ProductStatus.PUBLISHED:
        predicates.append(eq("status", criteria.status.value))

    if criteria.category_slug:
        predicates.append(eq("category_slug", criteria.category_slug))

    if criteria.is_best_seller is not None:
        predicates.append(eq("is_best_seller", criteria.is_best_seller))

    if criteria.is_on_sale is not None:
        predicates.append(eq("is_on_sale", criteria.is_on_sale))

    search = (criteria.search_text or "").strip()
    if search:
        predicates.append(AnyOf(filters=tuple(icontains(column, search) for column in SEARCH_COLUMNS)))

    return predicates


def build_order(sort: SortOption) -> List[Order]:
    return [*SORT_ORDERS[sort], TIE_BREAKER]


class CatalogQueryEngine:
    """Runs filtered, sorted and paginated product listings against a store.

    The engine is stateless: accumulating pages for a "load more" view is
    the caller's job (see ``ProductPager``). Store failures surface as
    ``FetchFailure`` and are never retried here.
    """

    def __init__(self, store: DataStore, max_page_size: Optional[int] = None):
        self.store = store
        self.max_page_size = max_page_size or settings.MAX_PAGE_SIZE

    async def query(self, criteria: CatalogQuery) -> ProductPage:
        page_size = min(criteria.page_size, self.max_page_size)
        offset = criteria.page * page_size

        result = await select_products(
            self.store,
            filters=build_predicates(criteria),
            order=build_order(criteria.sort),
            offset=offset,
            limit=page_size,
        )

        items = [ProductWithDetails.model_validate(row) for row in result.rows]
        total = result.count or 0
        has_more = len(items) == page_size and total > offset + len(items)

        logger.debug(
            "Product query page=%s size=%s returned %s of %s",
            criteria.page, page_size, len(items), total,
        )
        return ProductPage(
            items=items,
            total=total,
            has_more=has_more,
            page=criteria.page,
            page_size=page_size,
        )

    async def load_range(self, criteria: CatalogQuery, offset: int, limit: int) -> List[ProductWithDetails]:
        """Fetch ``limit`` rows starting at ``offset`` in a single call."""
        result = await select_products(
            self.store,
            filters=build_predicates(criteria),
            order=build_order(criteria.sort),
            offset=offset,
            limit=limit,
        )
        return [ProductWithDetails.model_validate(row) for row in result.rows]


async def get_product(store: DataStore, product_id: str) -> ProductWithDetails:
    row = await get_product_by_id(store, product_id)
    if row is None:
        raise NotFoundError("Product", product_id)
    return ProductWithDetails.model_validate(row)


async def list_categories_with_counts(store: DataStore) -> List[CategoryWithCount]:
    categories, products = await asyncio.gather(
        get_visible_categories(store),
        get_eligible_product_categories(store),
    )
    counts = Counter(str(row.get("category_id")) for row in products)
    return [
        CategoryWithCount.model_validate({**row, "product_count": counts.get(str(row["id"]), 0)})
        for row in categories
    ]


async def get_category(store: DataStore, slug: str) -> Category:
    row = await get_category_by_slug(store, slug)
    if row is None:
        raise NotFoundError("Category", slug)
    return Category.model_validate(row)


async def list_occasions(store: DataStore) -> List[Occasion]:
    rows = await get_visible_occasions(store)
    return [Occasion.model_validate(row) for row in rows]


async def list_product_occasion_links(store: DataStore) -> List[ProductOccasionLink]:
    """Join product_occasions with occasion slugs; links to unknown occasions are dropped."""
    links, occasions = await asyncio.gather(get_product_occasions(store), get_all_occasions(store))
    slug_by_id = {str(row["id"]): row.get("slug") for row in occasions}

    result = []
    for link in links:
        slug = slug_by_id.get(str(link.get("occasion_id")))
        if slug:
            result.append(ProductOccasionLink(product_id=str(link["product_id"]), occasion_slug=slug))
    return result


async def load_shop_catalog(store: DataStore) -> ShopCatalog:
    """Fetch everything the shop view filters in memory, concurrently."""
    products, categories, occasions, links = await asyncio.gather(
        get_eligible_products(store),
        list_categories_with_counts(store),
        list_occasions(store),
        list_product_occasion_links(store),
    )
    occasion_map: Dict[str, Set[str]] = build_occasion_map(links)
    return ShopCatalog(
        products=[ProductWithDetails.model_validate(row) for row in products],
        categories=categories,
        occasions=occasions,
        occasion_map=occasion_map,
    )
