# storefront/domain/homepage/composer.py
import logging
from typing import Any, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from storefront.domain.catalog.schemas import ProductWithDetails
from storefront.domain.i18n.localization import DEFAULT_LANGUAGE, Language, coerce_language, resolve_localized
from storefront.domain.i18n.translations import LanguageContext
from storefront.domain.images import ImageResolver, StorageImageResolver
from .config import (
    BannerConfig,
    CategoryGridConfig,
    GalleryConfig,
    ProductFilter,
    ProductFilterKind,
    ProductGridConfig,
    TextImageConfig,
    TrustBadgesConfig,
    parse_config,
)
from .items import SectionItemResolver
from .schemas import (
    BannerWidget,
    CallToAction,
    CategoryGridWidget,
    GalleryWidget,
    Presentation,
    ProductCard,
    ProductGridWidget,
    Section,
    SectionHeader,
    SectionItem,
    TextImageWidget,
    Tile,
    TrustBadgesWidget,
    Widget,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def select_products(pool: Iterable[ProductWithDetails], product_filter: ProductFilter) -> List[ProductWithDetails]:
    """Eligible products of the pool narrowed by a product grid filter.

    Pool order is kept except for new arrivals, which are sorted newest
    first (undated products last).
    """
    eligible = [product for product in pool if product.is_eligible]
    kind = product_filter.kind

    if kind == ProductFilterKind.BEST_SELLER:
        return [p for p in eligible if p.is_best_seller]
    if kind == ProductFilterKind.ON_SALE:
        return [p for p in eligible if p.is_on_sale]
    if kind == ProductFilterKind.FEATURED:
        return [p for p in eligible if p.is_best_seller or p.is_on_sale]
    if kind == ProductFilterKind.CATEGORY:
        return [p for p in eligible if p.category_slug == product_filter.category_slug]
    if kind == ProductFilterKind.NEW_ARRIVAL:
        dated = [p for p in eligible if p.created_at is not None]
        undated = [p for p in eligible if p.created_at is None]
        dated.sort(key=lambda p: p.created_at, reverse=True)
        return dated + undated
    return eligible


class SectionComposer:
    """Turns the active homepage sections into an ordered list of widgets.

    Each section is interpreted through its typed config and yields at most
    one widget. Sections with an empty body are kept so the admin-defined
    order is preserved; sections of an unknown type are skipped.
    """

    def __init__(self, language=DEFAULT_LANGUAGE, image_resolver: Optional[ImageResolver] = None):
        self.language: Language = coerce_language(language)
        self.context = LanguageContext(self.language)
        self.image_url = image_resolver or StorageImageResolver()
        self._builders = {
            ProductGridConfig: self._product_grid,
            CategoryGridConfig: self._category_grid,
            GalleryConfig: self._gallery,
            TrustBadgesConfig: self._trust_badges,
            BannerConfig: self._banner,
            TextImageConfig: self._text_image,
        }

    def compose(
        self,
        sections: Iterable[Section],
        items: Iterable[SectionItem],
        product_pool: Sequence[ProductWithDetails],
    ) -> List[Widget]:
        resolver = SectionItemResolver(items)
        active = sorted(
            (section for section in sections if section.is_active),
            key=lambda section: (section.display_order, section.id),
        )

        widgets = []
        for section in active:
            widget = self.compose_section(section, resolver, product_pool)
            if widget is not None:
                widgets.append(widget)
        return widgets

    def compose_section(
        self,
        section: Section,
        resolver: SectionItemResolver,
        product_pool: Sequence[ProductWithDetails],
    ) -> Optional[Widget]:
        config = parse_config(section.section_type, section.config)
        builder = self._builders.get(type(config))
        if builder is None:
            logger.warning("Skipping homepage section %s with unknown type %r", section.id, section.section_type)
            return None
        return builder(section, config, resolver, product_pool)

    def _base(self, section: Section) -> dict:
        return {
            "section_id": section.id,
            "display_order": section.display_order,
            "header": SectionHeader(
                title=resolve_localized(section, "title", self.language),
                subtitle=resolve_localized(section, "subtitle", self.language),
            ),
            "presentation": Presentation(
                layout_style=section.layout_style,
                columns=section.columns,
                item_shape=section.item_shape,
                background_color=section.background_color,
                background_style=section.background_style,
                padding_size=section.padding_size,
            ),
        }

    def _product_grid(self, section, config: ProductGridConfig, resolver, product_pool):
        products = select_products(product_pool, config.filter)[: config.limit]

        view_all_link = None
        if products:
            if config.filter.kind == ProductFilterKind.CATEGORY:
                view_all_link = f"/category/{config.filter.category_slug}"
            else:
                view_all_link = "/products"

        return ProductGridWidget(
            **self._base(section),
            products=[self.product_card(product) for product in products],
            show_price=config.show_price,
            show_badge=config.show_badge,
            show_inquiry_button=config.show_inquiry_button,
            show_add_to_cart=config.show_add_to_cart,
            view_all_label=self.context.translate("common.viewAll") if products else None,
            view_all_link=view_all_link,
        )

    def _category_grid(self, section, config: CategoryGridConfig, resolver, product_pool):
        return CategoryGridWidget(
            **self._base(section),
            category_type=config.category_type,
            tiles=self._tiles(resolver.resolve(section.id)),
        )

    def _gallery(self, section, config: GalleryConfig, resolver, product_pool):
        return GalleryWidget(
            **self._base(section),
            columns=config.columns,
            tiles=self._tiles(resolver.resolve(section.id)),
        )

    def _trust_badges(self, section, config: TrustBadgesConfig, resolver, product_pool):
        return TrustBadgesWidget(
            **self._base(section),
            icon_size=config.icon_size,
            tiles=self._tiles(resolver.resolve(section.id)),
        )

    def _banner(self, section, config: BannerConfig, resolver, product_pool):
        return BannerWidget(
            **self._base(section),
            image_url=self.image_url(config.image_path),
            link=config.link,
            height=config.height,
            text_position=config.text_position,
            overlay_opacity=config.overlay_opacity,
            cta=self._cta(config),
        )

    def _text_image(self, section, config: TextImageConfig, resolver, product_pool):
        return TextImageWidget(
            **self._base(section),
            image_url=self.image_url(config.image_path),
            image_position=config.image_position,
            content=resolve_localized(config, "content", self.language),
            cta=self._cta(config),
        )

    def _cta(self, config) -> Optional[CallToAction]:
        cta_text = resolve_localized(config, "cta_text", self.language)
        if not cta_text or not config.cta_link:
            return None
        return CallToAction(text=cta_text, link=config.cta_link)

    def _tiles(self, items: List[SectionItem]) -> List[Tile]:
        return [
            Tile(
                id=item.id,
                title=resolve_localized(item, "title", self.language),
                subtitle=resolve_localized(item, "subtitle", self.language),
                image_url=self.image_url(item.image_path),
                link=item.link,
                icon=item.icon,
                background_color=item.background_color,
                text_color=item.text_color,
            )
            for item in items
        ]

    def product_card(self, product: ProductWithDetails) -> ProductCard:
        return ProductCard(
            id=product.id,
            name=resolve_localized(product, "name", self.language),
            category_name=resolve_localized(product, "category_name", self.language),
            category_slug=product.category_slug,
            image_url=self.image_url(product.primary_image_path),
            price=product.price,
            effective_price=product.effective_price,
            original_price=product.price if product.has_active_sale else None,
            is_on_sale=product.is_on_sale,
            is_best_seller=product.is_best_seller,
            link=f"/product/{product.id}",
        )


def _as_models(model: Type[M], values: Iterable[Any]) -> List[M]:
    return [value if isinstance(value, model) else model.model_validate(value) for value in values]


def compose_homepage(
    sections: Iterable[Any],
    items: Iterable[Any],
    product_pool: Iterable[Any],
    language=DEFAULT_LANGUAGE,
    image_resolver: Optional[ImageResolver] = None,
) -> List[Widget]:
    """Compose the homepage from section, item and product rows or models."""
    composer = SectionComposer(language, image_resolver)
    return composer.compose(
        _as_models(Section, sections),
        _as_models(SectionItem, items),
        _as_models(ProductWithDetails, product_pool),
    )
