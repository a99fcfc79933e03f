# storefront/domain/homepage/schemas.py
import enum
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator


class SectionType(str, enum.Enum):
    PRODUCT_GRID = "product_grid"
    CATEGORY_GRID = "category_grid"
    BANNER = "banner"
    TEXT_IMAGE = "text_image"
    TRUST_BADGES = "trust_badges"
    GALLERY = "gallery"


class LayoutStyle(str, enum.Enum):
    GRID_2 = "grid-2"
    GRID_3 = "grid-3"
    GRID_4 = "grid-4"
    GRID_5 = "grid-5"
    GRID_6 = "grid-6"
    CAROUSEL = "carousel"
    MASONRY = "masonry"


LAYOUT_COLUMNS = {
    LayoutStyle.GRID_2: 2,
    LayoutStyle.GRID_3: 3,
    LayoutStyle.GRID_4: 4,
    LayoutStyle.GRID_5: 5,
    LayoutStyle.GRID_6: 6,
}


class ItemShape(str, enum.Enum):
    SQUARE = "square"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    CARD = "card"


class BackgroundStyle(str, enum.Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    IMAGE = "image"


class PaddingSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class Section(BaseModel):
    """A homepage section row as read from the store.

    Presentation enums fall back to their defaults on unknown values;
    section_type and config are left raw for the config registry.
    """

    id: str
    section_type: str = ""
    title_mk: Optional[str] = None
    title_en: Optional[str] = None
    subtitle_mk: Optional[str] = None
    subtitle_en: Optional[str] = None

    layout_style: LayoutStyle = LayoutStyle.GRID_4
    item_shape: ItemShape = ItemShape.SQUARE
    config: Dict[str, Any] = Field(default_factory=dict)

    background_color: str = "#FFFFFF"
    background_style: BackgroundStyle = BackgroundStyle.SOLID
    padding_size: PaddingSize = PaddingSize.MEDIUM

    display_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value)

    @field_validator("section_type", mode="before")
    @classmethod
    def _type_as_str(cls, value):
        return value.strip() if isinstance(value, str) else ""

    @field_validator("layout_style", "item_shape", "background_style", "padding_size", mode="before")
    @classmethod
    def _known_or_default(cls, value, info):
        field = cls.model_fields[info.field_name]
        try:
            return field.annotation(value)
        except ValueError:
            return field.default

    @field_validator("config", mode="before")
    @classmethod
    def _config_mapping(cls, value):
        return dict(value) if isinstance(value, Mapping) else {}

    @field_validator("background_color", mode="before")
    @classmethod
    def _color(cls, value):
        return value if isinstance(value, str) and value.strip() else "#FFFFFF"

    @field_validator("display_order", mode="before")
    @classmethod
    def _order(cls, value):
        return _int_or(value, 0)

    @property
    def columns(self) -> Optional[int]:
        return LAYOUT_COLUMNS.get(self.layout_style)


class SectionItem(BaseModel):
    id: str
    section_id: str
    title_mk: Optional[str] = None
    title_en: Optional[str] = None
    subtitle_mk: Optional[str] = None
    subtitle_en: Optional[str] = None
    image_path: Optional[str] = None
    link: Optional[str] = None
    icon: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    display_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True

    @field_validator("id", "section_id", mode="before")
    @classmethod
    def _as_str(cls, value):
        return str(value)

    @field_validator("display_order", mode="before")
    @classmethod
    def _order(cls, value):
        return _int_or(value, 0)


# Widgets: what the view layer renders, one per composed section.


class SectionHeader(BaseModel):
    title: str = ""
    subtitle: str = ""


class Presentation(BaseModel):
    layout_style: LayoutStyle
    columns: Optional[int] = None
    item_shape: ItemShape
    background_color: str
    background_style: BackgroundStyle
    padding_size: PaddingSize


class ProductCard(BaseModel):
    id: str
    name: str
    category_name: str
    category_slug: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[Decimal] = None
    effective_price: Optional[Decimal] = None
    # list price shown struck through while a sale is active
    original_price: Optional[Decimal] = None
    is_on_sale: bool = False
    is_best_seller: bool = False
    link: str


class Tile(BaseModel):
    id: str
    title: str
    subtitle: str
    image_url: Optional[str] = None
    link: Optional[str] = None
    icon: Optional[str] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None


class CallToAction(BaseModel):
    text: str
    link: str


class WidgetBase(BaseModel):
    section_id: str
    display_order: int
    header: SectionHeader
    presentation: Presentation


class ProductGridWidget(WidgetBase):
    section_type: Literal["product_grid"] = "product_grid"
    products: List[ProductCard]
    show_price: bool
    show_badge: bool
    show_inquiry_button: bool
    show_add_to_cart: bool
    view_all_label: Optional[str] = None
    view_all_link: Optional[str] = None


class CategoryGridWidget(WidgetBase):
    section_type: Literal["category_grid"] = "category_grid"
    category_type: str
    tiles: List[Tile]


class GalleryWidget(WidgetBase):
    section_type: Literal["gallery"] = "gallery"
    columns: int
    tiles: List[Tile]


class TrustBadgesWidget(WidgetBase):
    section_type: Literal["trust_badges"] = "trust_badges"
    icon_size: str
    tiles: List[Tile]


class BannerWidget(WidgetBase):
    section_type: Literal["banner"] = "banner"
    image_url: Optional[str] = None
    link: Optional[str] = None
    height: str
    text_position: str
    overlay_opacity: int
    cta: Optional[CallToAction] = None


class TextImageWidget(WidgetBase):
    section_type: Literal["text_image"] = "text_image"
    image_url: Optional[str] = None
    image_position: str
    content: str
    cta: Optional[CallToAction] = None


Widget = Annotated[
    Union[
        ProductGridWidget,
        CategoryGridWidget,
        GalleryWidget,
        TrustBadgesWidget,
        BannerWidget,
        TextImageWidget,
    ],
    Field(discriminator="section_type"),
]


class HomepageOut(BaseModel):
    language: str
    widgets: List[Widget]
