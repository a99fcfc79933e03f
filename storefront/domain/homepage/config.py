# storefront/domain/homepage/config.py
"""Typed configuration for each homepage section type.

Admins edit ``homepage_sections.config`` as free-form JSON. This module is
the only place that reads it: ``parse_config`` picks the model registered
for the section type and turns the raw mapping into a fully defaulted,
typed config. Parsing never fails. Unknown keys are ignored, missing or
malformed values take their defaults, out of range numbers are clamped.
"""
import enum
import logging
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from storefront.core.errors import UnknownSectionType
from .schemas import SectionType

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_LIMIT = 8
MAX_PRODUCT_LIMIT = 48
DEFAULT_OVERLAY_OPACITY = 30
DEFAULT_GALLERY_COLUMNS = 6
GALLERY_COLUMNS = (3, 4, 5, 6)

CATEGORY_FILTER_PREFIX = "category:"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def clamp_int(value: Any, default: int, low: int, high: int) -> int:
    number = _number(value)
    if number is None or number != number:
        return default
    return int(round(max(low, min(high, number))))


def choice(value: Any, choices: Tuple[str, ...], default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()
    return default


def flag(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    return default


def text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class ProductFilterKind(str, enum.Enum):
    ALL = "all"
    BEST_SELLER = "best_seller"
    ON_SALE = "on_sale"
    NEW_ARRIVAL = "new_arrival"
    FEATURED = "featured"
    CATEGORY = "category"


class ProductFilter(BaseModel):
    kind: ProductFilterKind = ProductFilterKind.ALL
    category_slug: Optional[str] = None

    @classmethod
    def parse(cls, raw: Any) -> "ProductFilter":
        if isinstance(raw, ProductFilter):
            return raw
        value = text(raw)
        if value is None:
            return cls()
        if value.startswith(CATEGORY_FILTER_PREFIX):
            slug = value[len(CATEGORY_FILTER_PREFIX):].strip()
            if slug:
                return cls(kind=ProductFilterKind.CATEGORY, category_slug=slug)
            return cls()
        try:
            kind = ProductFilterKind(value)
        except ValueError:
            logger.debug("Unknown product grid filter %r, showing all products", value)
            return cls()
        if kind == ProductFilterKind.CATEGORY:
            return cls()
        return cls(kind=kind)


class ProductGridConfig(BaseModel):
    section_type: Literal["product_grid"] = "product_grid"
    filter: ProductFilter = Field(default_factory=ProductFilter)
    limit: int = DEFAULT_PRODUCT_LIMIT
    show_price: bool = True
    show_badge: bool = True
    show_inquiry_button: bool = False
    show_add_to_cart: bool = False

    @field_validator("filter", mode="before")
    @classmethod
    def _filter(cls, value):
        return ProductFilter.parse(value)

    @field_validator("limit", mode="before")
    @classmethod
    def _limit(cls, value):
        return clamp_int(value, DEFAULT_PRODUCT_LIMIT, 1, MAX_PRODUCT_LIMIT)

    @field_validator("show_price", "show_badge", "show_inquiry_button", "show_add_to_cart", mode="before")
    @classmethod
    def _flags(cls, value, info):
        return flag(value, cls.model_fields[info.field_name].default)


class CategoryGridConfig(BaseModel):
    section_type: Literal["category_grid"] = "category_grid"
    category_type: str = "custom"

    @field_validator("category_type", mode="before")
    @classmethod
    def _category_type(cls, value):
        return choice(value, ("occasion", "flower_type", "custom"), "custom")


class BannerConfig(BaseModel):
    section_type: Literal["banner"] = "banner"
    image_path: Optional[str] = None
    link: Optional[str] = None
    height: str = "medium"
    text_position: str = "center"
    overlay_opacity: int = DEFAULT_OVERLAY_OPACITY
    cta_text_mk: Optional[str] = None
    cta_text_en: Optional[str] = None
    cta_link: Optional[str] = None

    @field_validator("image_path", "link", "cta_text_mk", "cta_text_en", "cta_link", mode="before")
    @classmethod
    def _text(cls, value):
        return text(value)

    @field_validator("height", mode="before")
    @classmethod
    def _height(cls, value):
        return choice(value, ("small", "medium", "large"), "medium")

    @field_validator("text_position", mode="before")
    @classmethod
    def _text_position(cls, value):
        return choice(value, ("left", "center", "right"), "center")

    @field_validator("overlay_opacity", mode="before")
    @classmethod
    def _opacity(cls, value):
        return clamp_int(value, DEFAULT_OVERLAY_OPACITY, 0, 100)


class TextImageConfig(BaseModel):
    section_type: Literal["text_image"] = "text_image"
    image_position: str = "right"
    image_path: Optional[str] = None
    content_mk: Optional[str] = None
    content_en: Optional[str] = None
    cta_text_mk: Optional[str] = None
    cta_text_en: Optional[str] = None
    cta_link: Optional[str] = None

    @field_validator("image_path", "content_mk", "content_en", "cta_text_mk", "cta_text_en", "cta_link", mode="before")
    @classmethod
    def _text(cls, value):
        return text(value)

    @field_validator("image_position", mode="before")
    @classmethod
    def _image_position(cls, value):
        return choice(value, ("left", "right"), "right")


class GalleryConfig(BaseModel):
    section_type: Literal["gallery"] = "gallery"
    columns: int = DEFAULT_GALLERY_COLUMNS

    @field_validator("columns", mode="before")
    @classmethod
    def _columns(cls, value):
        return clamp_int(value, DEFAULT_GALLERY_COLUMNS, GALLERY_COLUMNS[0], GALLERY_COLUMNS[-1])


class TrustBadgesConfig(BaseModel):
    section_type: Literal["trust_badges"] = "trust_badges"
    icon_size: str = "medium"

    @field_validator("icon_size", mode="before")
    @classmethod
    def _icon_size(cls, value):
        return choice(value, ("small", "medium", "large"), "medium")


class UnknownSectionConfig(BaseModel):
    """Placeholder for a section type with no registered config; renders nothing."""

    section_type: str


TypedConfig = Union[
    ProductGridConfig,
    CategoryGridConfig,
    BannerConfig,
    TextImageConfig,
    GalleryConfig,
    TrustBadgesConfig,
    UnknownSectionConfig,
]

CONFIG_MODELS: Dict[str, Type[BaseModel]] = {
    SectionType.PRODUCT_GRID.value: ProductGridConfig,
    SectionType.CATEGORY_GRID.value: CategoryGridConfig,
    SectionType.BANNER.value: BannerConfig,
    SectionType.TEXT_IMAGE.value: TextImageConfig,
    SectionType.GALLERY.value: GalleryConfig,
    SectionType.TRUST_BADGES.value: TrustBadgesConfig,
}


def config_model_for(section_type: Any) -> Type[BaseModel]:
    model = CONFIG_MODELS.get(section_type) if isinstance(section_type, str) else None
    if model is None:
        raise UnknownSectionType(str(section_type))
    return model


def parse_config(section_type: Any, raw_config: Any) -> TypedConfig:
    try:
        model = config_model_for(section_type)
    except UnknownSectionType as exc:
        logger.debug("%s, config not parsed", exc)
        return UnknownSectionConfig(section_type=exc.section_type)

    data = {
        key: value
        for key, value in (raw_config.items() if isinstance(raw_config, Mapping) else ())
        if key != "section_type"
    }
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.debug("Invalid %s config, using defaults: %s", section_type, exc)
        return model()
