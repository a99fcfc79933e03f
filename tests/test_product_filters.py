from decimal import Decimal

from conftest import catalog_products, product_row

from storefront.domain.catalog.filters import build_occasion_map, filter_products
from storefront.domain.catalog.schemas import FilterState, ProductOccasionLink, ProductWithDetails


def products(*rows):
    return [ProductWithDetails.model_validate(row) for row in rows]


def ids(result):
    return [product.id for product in result]


def test_flags_are_anded():
    pool = products(
        product_row("sale", is_on_sale=True, is_best_seller=False),
        product_row("best", is_on_sale=False, is_best_seller=True),
    )
    assert filter_products(pool, FilterState(on_sale=True, best_seller=True)) == []
    assert ids(filter_products(pool, FilterState(on_sale=True))) == ["sale"]
    assert ids(filter_products(pool, FilterState(best_seller=True))) == ["best"]


def test_empty_state_keeps_only_eligible_products_in_order():
    pool = products(*catalog_products())
    assert ids(filter_products(pool, FilterState())) == ["p1", "p2", "p3", "p5"]


def test_category_filter():
    pool = products(*catalog_products())
    assert ids(filter_products(pool, FilterState(category_slug="wedding"))) == ["p5"]


def test_price_range_uses_effective_price():
    pool = products(*catalog_products())
    # p3 lists at 20 but sells at 15
    assert ids(filter_products(pool, FilterState(min_price=Decimal("12"), max_price=Decimal("16")))) == ["p3"]
    assert ids(filter_products(pool, FilterState(max_price=Decimal("10")))) == ["p1", "p5"]
    assert ids(filter_products(pool, FilterState(min_price=Decimal("10")))) == ["p1", "p3"]


def test_unpriced_products_fail_any_price_bound():
    pool = products(*catalog_products())
    assert "p2" not in ids(filter_products(pool, FilterState(min_price=Decimal("0"))))


def test_occasion_filter_uses_precomputed_map():
    links = [
        ProductOccasionLink(product_id="p1", occasion_slug="anniversary"),
        ProductOccasionLink(product_id="p3", occasion_slug="anniversary"),
        ProductOccasionLink(product_id="p3", occasion_slug="mothers-day"),
    ]
    occasion_map = build_occasion_map(links)
    assert occasion_map == {"p1": {"anniversary"}, "p3": {"anniversary", "mothers-day"}}

    pool = products(*catalog_products())
    state = FilterState(occasion_slug="mothers-day")
    assert ids(filter_products(pool, state, occasion_map)) == ["p3"]
    assert filter_products(pool, state) == []


def test_predicates_commute():
    pool = products(*catalog_products())
    occasion_map = {"p1": {"anniversary"}, "p3": {"anniversary"}}
    state = FilterState(occasion_slug="anniversary", on_sale=True, category_slug="birthday", max_price=Decimal("15"))
    assert ids(filter_products(pool, state, occasion_map)) == ["p3"]
    assert ids(filter_products(reversed(pool), state, occasion_map)) == ["p3"]


def test_active_filter_count():
    assert FilterState().active_count == 0
    assert FilterState(category_slug="birthday", min_price=Decimal("0"), on_sale=True).active_count == 3
