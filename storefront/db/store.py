# storefront/db/store.py
"""Generic async access to the catalog and content relations.

Domain code never builds SQL itself: it describes a select with ``Filter``,
``AnyOf`` and ``Order`` values and hands it to a ``DataStore``. The SQL
implementation below runs it through SQLAlchemy Core; ``MemoryStore`` in
``storefront.db.memory`` evaluates the same description over plain rows.
"""
import asyncio
import enum
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union

from pydantic import BaseModel
from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError

from storefront.core.config import settings
from storefront.core.errors import FetchFailure
from storefront.db.models.categories import Category
from storefront.db.models.homepage_section_items import HomepageSectionItem
from storefront.db.models.homepage_sections import HomepageSection
from storefront.db.models.occasions import Occasion
from storefront.db.models.product_occasions import ProductOccasion
from storefront.db.models.products import Product
from storefront.db.models.products_with_details import ProductWithDetails

logger = logging.getLogger(__name__)

TABLES = {
    model.__tablename__: model.__table__
    for model in (
        Category,
        Occasion,
        Product,
        ProductOccasion,
        ProductWithDetails,
        HomepageSection,
        HomepageSectionItem,
    )
}


class FilterOp(str, enum.Enum):
    EQ = "eq"
    IN = "in"
    GTE = "gte"
    LTE = "lte"
    ICONTAINS = "icontains"


class Filter(BaseModel):
    column: str
    op: FilterOp = FilterOp.EQ
    value: Any = None

    class Config:
        frozen = True


class AnyOf(BaseModel):
    """OR group of filters; the group matches when any member matches."""

    filters: Tuple[Filter, ...]

    class Config:
        frozen = True


Predicate = Union[Filter, AnyOf]


class Order(BaseModel):
    column: str
    ascending: bool = True
    nulls_last: bool = True

    class Config:
        frozen = True


class SelectResult(BaseModel):
    rows: List[Dict[str, Any]]
    # only set when the caller asked for an exact count
    count: Optional[int] = None


def eq(column: str, value: Any) -> Filter:
    return Filter(column=column, op=FilterOp.EQ, value=value)


def in_(column: str, values: Sequence[Any]) -> Filter:
    return Filter(column=column, op=FilterOp.IN, value=tuple(values))


def gte(column: str, value: Any) -> Filter:
    return Filter(column=column, op=FilterOp.GTE, value=value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column=column, op=FilterOp.LTE, value=value)


def icontains(column: str, text: str) -> Filter:
    return Filter(column=column, op=FilterOp.ICONTAINS, value=text)


class DataStore(Protocol):
    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Sequence[Order] = (),
        offset: int = 0,
        limit: Optional[int] = None,
        count: bool = False,
    ) -> SelectResult:
        ...


class SqlAlchemyStore:
    """DataStore backed by an async SQLAlchemy session factory.

    Every select runs in its own session so that independent selects can be
    awaited concurrently (an AsyncSession must not be shared between tasks).
    """

    def __init__(self, session_factory, timeout: Optional[float] = None):
        self._session_factory = session_factory
        self._timeout = timeout if timeout is not None else settings.DB_QUERY_TIMEOUT

    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Sequence[Order] = (),
        offset: int = 0,
        limit: Optional[int] = None,
        count: bool = False,
    ) -> SelectResult:
        sa_table = TABLES.get(table)
        if sa_table is None:
            raise FetchFailure(table, "unknown relation")

        try:
            clauses = [self._clause(sa_table, predicate) for predicate in filters]
            order_by = [self._order(sa_table, o) for o in order]
        except KeyError as exc:
            raise FetchFailure(table, f"unknown column {exc}") from exc

        stmt = select(sa_table)
        if clauses:
            stmt = stmt.where(and_(*clauses))
        if order_by:
            stmt = stmt.order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        count_stmt = None
        if count:
            count_stmt = select(func.count()).select_from(sa_table)
            if clauses:
                count_stmt = count_stmt.where(and_(*clauses))

        try:
            return await asyncio.wait_for(self._execute(stmt, count_stmt), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Select on %s timed out after %ss", table, self._timeout)
            raise FetchFailure(table, "timed out", exc) from exc
        except SQLAlchemyError as exc:
            logger.error("Select on %s failed: %s", table, exc)
            raise FetchFailure(table, str(exc), exc) from exc

    async def _execute(self, stmt, count_stmt) -> SelectResult:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = [dict(row) for row in result.mappings().all()]
            total = None
            if count_stmt is not None:
                total = (await session.execute(count_stmt)).scalar_one()
        return SelectResult(rows=rows, count=total)

    def _clause(self, sa_table, predicate: Predicate):
        if isinstance(predicate, AnyOf):
            return or_(*[self._clause(sa_table, f) for f in predicate.filters])

        column = sa_table.c[predicate.column]
        if predicate.op == FilterOp.EQ:
            if predicate.value is None:
                return column.is_(None)
            return column == predicate.value
        if predicate.op == FilterOp.IN:
            return column.in_(list(predicate.value))
        if predicate.op == FilterOp.GTE:
            return column >= predicate.value
        if predicate.op == FilterOp.LTE:
            return column <= predicate.value
        return column.icontains(predicate.value, autoescape=True)

    def _order(self, sa_table, order: Order):
        column = sa_table.c[order.column]
        expr = column.asc() if order.ascending else column.desc()
        return expr.nulls_last() if order.nulls_last else expr.nulls_first()
