from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from storefront.core.errors import FetchFailure
from storefront.db.memory import MemoryStore

BASE_TIME = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def product_row(product_id, **overrides):
    row = {
        "id": product_id,
        "name": f"Product {product_id}",
        "name_mk": f"Производ {product_id}",
        "name_en": f"Product {product_id}",
        "description": None,
        "description_mk": None,
        "description_en": None,
        "price": Decimal("10.00"),
        "sale_price": None,
        "status": "published",
        "is_on_sale": False,
        "is_best_seller": False,
        "display_order": 0,
        "is_visible": True,
        "created_at": BASE_TIME,
        "category_id": "cat-birthday",
        "category_name": "Birthday",
        "category_name_mk": "Роденден",
        "category_name_en": "Birthday",
        "category_slug": "birthday",
        "primary_image_path": f"products/{product_id}.jpg",
    }
    row.update(overrides)
    return row


def section_row(section_id, section_type, display_order, **overrides):
    row = {
        "id": section_id,
        "section_type": section_type,
        "title_mk": f"Наслов {section_id}",
        "title_en": f"Title {section_id}",
        "subtitle_mk": None,
        "subtitle_en": None,
        "layout_style": "grid-4",
        "item_shape": "square",
        "config": {},
        "background_color": "#FFFFFF",
        "background_style": "solid",
        "padding_size": "medium",
        "display_order": display_order,
        "is_active": True,
    }
    row.update(overrides)
    return row


def item_row(item_id, section_id, display_order, **overrides):
    row = {
        "id": item_id,
        "section_id": section_id,
        "title_mk": f"Ставка {item_id}",
        "title_en": f"Item {item_id}",
        "subtitle_mk": None,
        "subtitle_en": None,
        "image_path": f"items/{item_id}.jpg",
        "link": None,
        "icon": None,
        "background_color": None,
        "text_color": None,
        "display_order": display_order,
        "is_active": True,
    }
    row.update(overrides)
    return row


def catalog_products():
    return [
        product_row("p1", name="Balloons", price=Decimal("10"), is_best_seller=True,
                    created_at=BASE_TIME + timedelta(days=1), display_order=1),
        product_row("p2", name="Cake topper", price=None, is_on_sale=True,
                    created_at=BASE_TIME + timedelta(days=2), display_order=2),
        product_row("p3", name="Candles", price=Decimal("20"), sale_price=Decimal("15"), is_on_sale=True,
                    created_at=BASE_TIME + timedelta(days=3), display_order=3),
        product_row("p4", name="Draft gift", price=Decimal("5"), status="draft",
                    created_at=BASE_TIME + timedelta(days=4), display_order=4),
        product_row("p5", name="Rose bouquet", name_mk="Букет рози", name_en="Rose bouquet",
                    description_en="Twelve red roses", price=Decimal("5"),
                    created_at=BASE_TIME + timedelta(days=5), display_order=5,
                    category_id="cat-wedding", category_name="Wedding", category_name_mk="Свадба",
                    category_name_en="Wedding", category_slug="wedding"),
        product_row("p6", name="Hidden vase", price=Decimal("7"), is_visible=False,
                    created_at=BASE_TIME + timedelta(days=6), display_order=6,
                    category_id="cat-wedding", category_slug="wedding"),
    ]


def catalog_data():
    products = catalog_products()
    return {
        "categories": [
            {"id": "cat-birthday", "name": "Birthday", "name_mk": "Роденден", "name_en": "Birthday",
             "slug": "birthday", "display_order": 1, "is_visible": True},
            {"id": "cat-wedding", "name": "Wedding", "name_mk": "Свадба", "name_en": None,
             "slug": "wedding", "display_order": 2, "is_visible": True},
            {"id": "cat-archive", "name": "Archive", "name_mk": "Архива", "name_en": "Archive",
             "slug": "archive", "display_order": 3, "is_visible": False},
        ],
        "occasions": [
            {"id": "occ-1", "name": "Anniversary", "name_mk": "Годишнина", "name_en": "Anniversary",
             "slug": "anniversary", "display_order": 1, "is_visible": True},
            {"id": "occ-2", "name": "Mother's day", "name_mk": "Ден на мајката", "name_en": "Mother's day",
             "slug": "mothers-day", "display_order": 2, "is_visible": True},
            {"id": "occ-3", "name": "Retired", "name_mk": "Стара", "name_en": "Retired",
             "slug": "retired", "display_order": 3, "is_visible": False},
        ],
        "products": [
            {key: row[key] for key in ("id", "category_id", "name", "name_mk", "status", "is_visible")}
            for row in products
        ],
        "products_with_details": products,
        "product_occasions": [
            {"product_id": "p1", "occasion_id": "occ-1"},
            {"product_id": "p3", "occasion_id": "occ-1"},
            {"product_id": "p3", "occasion_id": "occ-2"},
            {"product_id": "p5", "occasion_id": "occ-2"},
            {"product_id": "p5", "occasion_id": "occ-missing"},
        ],
        "homepage_sections": [
            section_row("s-grid", "product_grid", 2, config={"filter": "best_seller", "limit": 4}),
            section_row("s-banner", "banner", 1, config={"image_path": "banners/spring.jpg",
                                                         "cta_text_mk": "Купи", "cta_text_en": "Shop",
                                                         "cta_link": "/products"}),
            section_row("s-gallery", "gallery", 3, config={"columns": 4}),
            section_row("s-off", "text_image", 0, is_active=False),
        ],
        "homepage_section_items": [
            item_row("i2", "s-gallery", 2),
            item_row("i1", "s-gallery", 1),
            item_row("i3", "s-gallery", 3, is_active=False),
        ],
    }


class FailingStore:
    """Wraps a store and fails selects on the given relations."""

    def __init__(self, store, fail_on=()):
        self.store = store
        self.fail_on = set(fail_on)
        self.calls = []

    async def select(self, table, filters=(), order=(), offset=0, limit=None, count=False):
        self.calls.append(table)
        if table in self.fail_on:
            raise FetchFailure(table, "connection reset")
        return await self.store.select(table, filters=filters, order=order, offset=offset, limit=limit, count=count)


@pytest.fixture
def store():
    return MemoryStore(catalog_data())
