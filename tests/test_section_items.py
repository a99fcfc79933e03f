from conftest import item_row

from storefront.domain.homepage.items import SectionItemResolver, resolve_items
from storefront.domain.homepage.schemas import SectionItem


def items(*rows):
    return [SectionItem.model_validate(row) for row in rows]


def test_active_items_of_section_in_display_order():
    resolver = SectionItemResolver(items(
        item_row("c", "s1", 2),
        item_row("a", "s1", 1),
        item_row("x", "s2", 0),
        item_row("b", "s1", 0, is_active=False),
    ))
    assert [item.id for item in resolver.resolve("s1")] == ["a", "c"]
    assert [item.id for item in resolver.resolve("s2")] == ["x"]


def test_ties_are_broken_by_id():
    rows = [item_row("i9", "s1", 1), item_row("i3", "s1", 1), item_row("i5", "s1", 0)]
    first = [item.id for item in resolve_items("s1", items(*rows))]
    second = [item.id for item in resolve_items("s1", items(*reversed(rows)))]
    assert first == second == ["i5", "i3", "i9"]


def test_unknown_section_has_no_items():
    assert resolve_items("missing", items(item_row("a", "s1", 0))) == []


def test_resolve_returns_a_copy():
    resolver = SectionItemResolver(items(item_row("a", "s1", 0)))
    resolver.resolve("s1").clear()
    assert len(resolver.resolve("s1")) == 1
