# storefront/domain/homepage/service.py
import asyncio
import logging
from typing import List, Optional

from storefront.core.config import settings
from storefront.db.repositories.catalog import get_eligible_products
from storefront.db.repositories.homepage import get_active_section_items, get_active_sections
from storefront.db.store import DataStore
from storefront.domain.catalog.schemas import ProductWithDetails
from storefront.domain.i18n.localization import DEFAULT_LANGUAGE
from storefront.domain.images import ImageResolver
from .composer import SectionComposer
from .schemas import Section, SectionItem, Widget

logger = logging.getLogger(__name__)


class HomepageService:
    """Loads everything the homepage needs and composes it.

    Sections, section items and the product pool are fetched concurrently.
    The three inputs are needed together, so the first failure fails the
    whole load with FetchFailure and nothing is composed.
    """

    def __init__(
        self,
        store: DataStore,
        image_resolver: Optional[ImageResolver] = None,
        pool_limit: Optional[int] = None,
    ):
        self.store = store
        self.image_resolver = image_resolver
        self.pool_limit = pool_limit or settings.HOMEPAGE_PRODUCT_POOL_LIMIT

    async def load(self, language=DEFAULT_LANGUAGE) -> List[Widget]:
        section_rows, item_rows, product_rows = await asyncio.gather(
            get_active_sections(self.store),
            get_active_section_items(self.store),
            get_eligible_products(self.store, limit=self.pool_limit),
        )

        sections = [Section.model_validate(row) for row in section_rows]
        items = [SectionItem.model_validate(row) for row in item_rows]
        products = [ProductWithDetails.model_validate(row) for row in product_rows]

        widgets = SectionComposer(language, self.image_resolver).compose(sections, items, products)
        logger.info(
            "Composed homepage: %s widgets from %s sections, %s pooled products",
            len(widgets), len(sections), len(products),
        )
        return widgets
