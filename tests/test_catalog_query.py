from datetime import timedelta
from decimal import Decimal

import pytest
from conftest import BASE_TIME, FailingStore, product_row

from storefront.core.errors import FetchFailure
from storefront.db.memory import MemoryStore
from storefront.domain.catalog.schemas import CatalogQuery, ProductStatus, SortOption
from storefront.domain.catalog.service import CatalogQueryEngine, build_order, build_predicates


def ids(items):
    return [product.id for product in items]


@pytest.fixture
def priced_store():
    prices = [None, Decimal("10"), Decimal("5"), None, Decimal("20")]
    return MemoryStore({
        "products_with_details": [
            product_row(f"p{index}", price=price, created_at=BASE_TIME + timedelta(hours=index))
            for index, price in enumerate(prices)
        ],
    })


@pytest.fixture
def large_store():
    return MemoryStore({
        "products_with_details": [
            product_row(
                f"p{index:02d}",
                # every third product shares a timestamp to exercise the id tie breaker
                created_at=BASE_TIME + timedelta(days=index // 3),
                status="published" if index % 7 else "draft",
            )
            for index in range(40)
        ],
    })


async def test_category_scenario(store):
    engine = CatalogQueryEngine(store)
    page = await engine.query(CatalogQuery(category_slug="birthday", status=ProductStatus.PUBLISHED, page_size=3))
    assert sorted(ids(page.items)) == ["p1", "p2", "p3"]
    assert page.total == 3
    assert page.has_more is False

    page = await engine.query(CatalogQuery(category_slug="birthday", page_size=10))
    assert page.total == 3
    assert page.has_more is False


async def test_hidden_and_unpublished_products_are_never_listed(store):
    page = await CatalogQueryEngine(store).query(CatalogQuery(page_size=20))
    assert sorted(ids(page.items)) == ["p1", "p2", "p3", "p5"]


async def test_price_sorting_puts_nulls_last(priced_store):
    engine = CatalogQueryEngine(priced_store)

    ascending = await engine.query(CatalogQuery(sort=SortOption.PRICE_ASC, page_size=10))
    assert [p.price for p in ascending.items] == [Decimal("5"), Decimal("10"), Decimal("20"), None, None]

    descending = await engine.query(CatalogQuery(sort=SortOption.PRICE_DESC, page_size=10))
    assert [p.price for p in descending.items] == [Decimal("20"), Decimal("10"), Decimal("5"), None, None]
    # unpriced products keep a stable id order
    assert ids(descending.items)[3:] == ["p0", "p3"]


async def test_date_and_name_orderings(store):
    engine = CatalogQueryEngine(store)
    newest = await engine.query(CatalogQuery(sort=SortOption.NEWEST))
    oldest = await engine.query(CatalogQuery(sort=SortOption.OLDEST))
    assert ids(newest.items) == ["p5", "p3", "p2", "p1"]
    assert ids(oldest.items) == ["p1", "p2", "p3", "p5"]

    by_name = await engine.query(CatalogQuery(sort=SortOption.NAME_ASC))
    assert [p.name for p in by_name.items] == ["Balloons", "Cake topper", "Candles", "Rose bouquet"]
    by_name_desc = await engine.query(CatalogQuery(sort=SortOption.NAME_DESC))
    assert ids(by_name_desc.items) == list(reversed(ids(by_name.items)))


async def test_flag_filters(store):
    engine = CatalogQueryEngine(store)
    assert ids((await engine.query(CatalogQuery(is_best_seller=True))).items) == ["p1"]
    assert ids((await engine.query(CatalogQuery(is_on_sale=True, sort=SortOption.OLDEST))).items) == ["p2", "p3"]
    assert ids((await engine.query(CatalogQuery(is_on_sale=False, sort=SortOption.OLDEST))).items) == ["p1", "p5"]


async def test_search_matches_any_language_case_insensitively(store):
    engine = CatalogQueryEngine(store)
    assert ids((await engine.query(CatalogQuery(search_text="  ROSE "))).items) == ["p5"]
    assert ids((await engine.query(CatalogQuery(search_text="букет"))).items) == ["p5"]
    assert ids((await engine.query(CatalogQuery(search_text="red roses"))).items) == ["p5"]
    assert (await engine.query(CatalogQuery(search_text="tulip"))).total == 0
    assert (await engine.query(CatalogQuery(search_text="   "))).total == 4


async def test_query_is_idempotent(large_store):
    engine = CatalogQueryEngine(large_store)
    criteria = CatalogQuery(sort=SortOption.NEWEST, page=1, page_size=7)
    first = await engine.query(criteria)
    second = await engine.query(criteria)
    assert first == second


@pytest.mark.parametrize("page_size", [1, 3, 5, 8])
@pytest.mark.parametrize("sort", [SortOption.NEWEST, SortOption.OLDEST, SortOption.NAME_ASC])
async def test_concatenated_pages_equal_single_range(large_store, page_size, sort):
    engine = CatalogQueryEngine(large_store)
    criteria = CatalogQuery(sort=sort, page_size=page_size)

    pages = []
    page_number = 0
    while True:
        page = await engine.query(criteria.for_page(page_number))
        pages.extend(page.items)
        if not page.has_more:
            break
        page_number += 1

    full = await engine.load_range(criteria, 0, (page_number + 1) * page_size)
    assert ids(pages) == ids(full)
    assert len(set(ids(pages))) == len(pages) == page.total


async def test_has_more_on_exact_final_page():
    store = MemoryStore({"products_with_details": [product_row(f"p{i}") for i in range(6)]})
    engine = CatalogQueryEngine(store)
    first = await engine.query(CatalogQuery(page_size=3))
    last = await engine.query(CatalogQuery(page=1, page_size=3))
    assert first.has_more is True
    assert len(last.items) == 3
    assert last.has_more is False


async def test_page_size_is_capped():
    store = MemoryStore({"products_with_details": [product_row(f"p{i}") for i in range(10)]})
    page = await CatalogQueryEngine(store, max_page_size=4).query(CatalogQuery(page_size=100))
    assert page.page_size == 4
    assert len(page.items) == 4
    assert page.has_more is True


async def test_store_failure_surfaces_as_fetch_failure(store):
    engine = CatalogQueryEngine(FailingStore(store, fail_on={"products_with_details"}))
    with pytest.raises(FetchFailure) as excinfo:
        await engine.query(CatalogQuery())
    assert excinfo.value.relation == "products_with_details"


def test_every_ordering_ends_with_id():
    for sort in SortOption:
        assert build_order(sort)[-1].column == "id"


def test_predicates_always_require_published_and_visible():
    for status in (None, ProductStatus.PUBLISHED, ProductStatus.DRAFT):
        columns = [(p.column, p.value) for p in build_predicates(CatalogQuery(status=status))]
        assert ("is_visible", True) in columns
        assert ("status", "published") in columns


@pytest.mark.parametrize("status", [None, ProductStatus.PUBLISHED, ProductStatus.DRAFT, ProductStatus.SOLD])
async def test_status_never_widens_past_published(store, status):
    page = await CatalogQueryEngine(store).query(CatalogQuery(status=status, page_size=20))
    assert all(product.is_eligible for product in page.items)
    if status in (None, ProductStatus.PUBLISHED):
        assert sorted(ids(page.items)) == ["p1", "p2", "p3", "p5"]
    else:
        assert page.items == []
        assert page.total == 0


async def test_capped_page_size_sets_the_offset():
    store = MemoryStore({"products_with_details": [product_row(f"p{i}") for i in range(10)]})
    engine = CatalogQueryEngine(store, max_page_size=4)
    second = await engine.query(CatalogQuery(sort=SortOption.OLDEST, page=1, page_size=100))
    assert ids(second.items) == ["p4", "p5", "p6", "p7"]
    assert second.has_more is True
    assert not hasattr(CatalogQuery(), "offset")
