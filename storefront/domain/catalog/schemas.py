# storefront/domain/catalog/schemas.py
import enum
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field, field_validator

from storefront.core.config import settings


class ProductStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    SOLD = "sold"


class SortOption(str, enum.Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


class ProductWithDetails(BaseModel):
    id: str
    name: Optional[str] = None
    name_mk: Optional[str] = None
    name_en: Optional[str] = None
    description: Optional[str] = None
    description_mk: Optional[str] = None
    description_en: Optional[str] = None

    price_text: Optional[str] = None
    price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    status: str = ProductStatus.DRAFT.value
    is_on_sale: bool = False
    is_best_seller: bool = False
    is_visible: bool = False
    display_order: int = 0
    created_at: Optional[datetime] = None

    category_id: Optional[str] = None
    category_name: Optional[str] = None
    category_name_mk: Optional[str] = None
    category_name_en: Optional[str] = None
    category_slug: Optional[str] = None
    primary_image_path: Optional[str] = None

    class Config:
        from_attributes = True

    @field_validator("id", "category_id", mode="before")
    @classmethod
    def _as_str(cls, value):
        return value if value is None else str(value)

    @property
    def is_eligible(self) -> bool:
        """Published and visible: the gate for every public listing."""
        return self.status == ProductStatus.PUBLISHED.value and self.is_visible

    @property
    def has_active_sale(self) -> bool:
        return self.is_on_sale and self.sale_price is not None

    @property
    def effective_price(self) -> Optional[Decimal]:
        return self.sale_price if self.has_active_sale else self.price


class CatalogQuery(BaseModel):
    """Filters, ordering and page window of one product listing request."""

    category_slug: Optional[str] = None
    status: Optional[ProductStatus] = ProductStatus.PUBLISHED
    is_best_seller: Optional[bool] = None
    is_on_sale: Optional[bool] = None
    search_text: Optional[str] = None
    sort: SortOption = SortOption.NEWEST
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

    class Config:
        frozen = True

    def for_page(self, page: int) -> "CatalogQuery":
        return self.model_copy(update={"page": page})


class ProductPage(BaseModel):
    items: List[ProductWithDetails]
    total: int
    has_more: bool
    page: int
    page_size: int


class Category(BaseModel):
    id: str
    name: Optional[str] = None
    name_mk: Optional[str] = None
    name_en: Optional[str] = None
    slug: str
    description: Optional[str] = None
    description_mk: Optional[str] = None
    description_en: Optional[str] = None
    category_image_path: Optional[str] = None
    display_order: int = 0
    is_visible: bool = True

    class Config:
        from_attributes = True

    @field_validator("id", mode="before")
    @classmethod
    def _as_str(cls, value):
        return str(value)


class CategoryWithCount(Category):
    product_count: int = 0


class Occasion(BaseModel):
    id: str
    name: Optional[str] = None
    name_mk: Optional[str] = None
    name_en: Optional[str] = None
    slug: str
    icon: Optional[str] = None
    occasion_image_path: Optional[str] = None
    description_mk: Optional[str] = None
    description_en: Optional[str] = None
    display_order: int = 0
    is_visible: bool = True

    class Config:
        from_attributes = True

    @field_validator("id", mode="before")
    @classmethod
    def _as_str(cls, value):
        return str(value)


class ProductOccasionLink(BaseModel):
    product_id: str
    occasion_slug: str


class FilterState(BaseModel):
    """Shop sidebar filters. Unset fields and False toggles match everything."""

    category_slug: Optional[str] = None
    occasion_slug: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    on_sale: bool = False
    best_seller: bool = False

    @property
    def active_count(self) -> int:
        values = [
            self.category_slug,
            self.occasion_slug,
            self.min_price is not None,
            self.max_price is not None,
            self.on_sale,
            self.best_seller,
        ]
        return len([value for value in values if value])


class ShopCatalog(BaseModel):
    """Everything the shop view filters in memory."""

    products: List[ProductWithDetails]
    categories: List[CategoryWithCount]
    occasions: List[Occasion]
    occasion_map: Dict[str, Set[str]]


class ShopOut(BaseModel):
    products: List[ProductWithDetails]
    total: int
    active_filters: int
    categories: List[CategoryWithCount]
    occasions: List[Occasion]
