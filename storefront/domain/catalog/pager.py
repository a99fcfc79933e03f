# storefront/domain/catalog/pager.py
import enum
import logging
from typing import List, Optional

from storefront.core.errors import FetchFailure
from .schemas import CatalogQuery, ProductWithDetails

logger = logging.getLogger(__name__)


class PagerStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class ProductPager:
    """Accumulates product pages for one "load more" consumer.

    idle -> loading on refresh(); loading -> loaded(page) or error.
    load_more() is refused while a request is outstanding or when there is
    nothing left. change_filter() resets to page 0; a response that arrives
    after a newer refresh/filter change is discarded. A failed request
    leaves the items already loaded in place.
    """

    def __init__(self, engine, criteria: CatalogQuery):
        self._engine = engine
        self._generation = 0
        self.criteria = criteria.for_page(0)
        self.items: List[ProductWithDetails] = []
        self.total = 0
        self.has_more = False
        self.page: Optional[int] = None
        self.status = PagerStatus.IDLE
        self.error: Optional[FetchFailure] = None

    @property
    def loading(self) -> bool:
        return self.status == PagerStatus.LOADING

    async def refresh(self) -> bool:
        return await self._fetch(0, append=False)

    async def load_more(self) -> bool:
        if self.loading or not self.has_more or self.page is None:
            return False
        return await self._fetch(self.page + 1, append=True)

    async def change_filter(self, criteria: CatalogQuery) -> bool:
        self.criteria = criteria.for_page(0)
        self.items = []
        self.total = 0
        self.has_more = False
        self.page = None
        return await self.refresh()

    async def _fetch(self, page: int, append: bool) -> bool:
        self._generation += 1
        generation = self._generation
        self.status = PagerStatus.LOADING
        self.error = None

        try:
            result = await self._engine.query(self.criteria.for_page(page))
        except FetchFailure as exc:
            if generation != self._generation:
                return False
            logger.warning("Loading product page %s failed: %s", page, exc)
            self.status = PagerStatus.ERROR
            self.error = exc
            return False

        if generation != self._generation:
            # superseded by a newer refresh or filter change
            return False

        self.items = self.items + result.items if append else list(result.items)
        self.total = result.total
        self.has_more = result.has_more
        self.page = page
        self.status = PagerStatus.LOADED
        return True
