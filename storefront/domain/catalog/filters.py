"""In-memory filtering for the shop view.

The shop loads every eligible product once and narrows the list locally as
the visitor toggles filters, so this module never touches the store. It
applies the same published+visible gate as the query engine.
"""
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from .schemas import FilterState, ProductOccasionLink, ProductWithDetails

Predicate = Callable[[ProductWithDetails], bool]
OccasionMap = Mapping[str, Set[str]]


def build_occasion_map(links: Iterable[ProductOccasionLink]) -> Dict[str, Set[str]]:
    """Precompute product id -> occasion slugs."""
    occasion_map: Dict[str, Set[str]] = {}
    for link in links:
        if not link.occasion_slug:
            continue
        occasion_map.setdefault(link.product_id, set()).add(link.occasion_slug)
    return occasion_map


def _eligible(product: ProductWithDetails) -> bool:
    return product.is_eligible


def _in_category(slug: str) -> Predicate:
    return lambda product: product.category_slug == slug


def _for_occasion(slug: str, occasion_map: OccasionMap) -> Predicate:
    return lambda product: slug in occasion_map.get(product.id, ())


def _price_between(low, high) -> Predicate:
    def check(product: ProductWithDetails) -> bool:
        price = product.effective_price
        if price is None:
            return False
        if low is not None and price < low:
            return False
        if high is not None and price > high:
            return False
        return True

    return check


def build_predicates(state: FilterState, occasion_map: Optional[OccasionMap] = None) -> List[Predicate]:
    predicates: List[Predicate] = [_eligible]

    if state.category_slug:
        predicates.append(_in_category(state.category_slug))
    if state.occasion_slug:
        predicates.append(_for_occasion(state.occasion_slug, occasion_map or {}))
    if state.min_price is not None or state.max_price is not None:
        predicates.append(_price_between(state.min_price, state.max_price))
    if state.on_sale:
        predicates.append(lambda product: product.is_on_sale)
    if state.best_seller:
        predicates.append(lambda product: product.is_best_seller)

    return predicates


def filter_products(
    products: Iterable[ProductWithDetails],
    state: FilterState,
    occasion_map: Optional[OccasionMap] = None,
) -> List[ProductWithDetails]:
    """Keep the products matching every active filter, preserving input order."""
    predicates = build_predicates(state, occasion_map)
    return [product for product in products if all(check(product) for check in predicates)]
