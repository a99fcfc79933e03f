# storefront/db/memory.py
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from storefront.core.errors import FetchFailure
from storefront.db.store import TABLES, AnyOf, Filter, FilterOp, Order, Predicate, SelectResult


class MemoryStore:
    """DataStore over in-process rows, with the same semantics as the SQL store.

    Used for previews and tests. Rows are plain dicts keyed by column name;
    a column missing from a row reads as NULL.
    """

    def __init__(self, data: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None):
        self._tables: Dict[str, List[Dict[str, Any]]] = {name: [] for name in TABLES}
        for name, rows in (data or {}).items():
            self.insert(name, rows)

    def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
        if table not in self._tables:
            raise KeyError(table)
        self._tables[table].extend(dict(row) for row in rows)

    async def select(
        self,
        table: str,
        filters: Sequence[Predicate] = (),
        order: Sequence[Order] = (),
        offset: int = 0,
        limit: Optional[int] = None,
        count: bool = False,
    ) -> SelectResult:
        if table not in self._tables:
            raise FetchFailure(table, "unknown relation")

        rows = [row for row in self._tables[table] if all(_matches(row, p) for p in filters)]
        total = len(rows)

        # successive stable sorts, least significant key first
        for o in reversed(order):
            present = [row for row in rows if row.get(o.column) is not None]
            missing = [row for row in rows if row.get(o.column) is None]
            present.sort(key=lambda row: row[o.column], reverse=not o.ascending)
            rows = present + missing if o.nulls_last else missing + present

        end = None if limit is None else offset + limit
        page = [dict(row) for row in rows[offset:end]]
        return SelectResult(rows=page, count=total if count else None)


def _matches(row: Mapping[str, Any], predicate: Predicate) -> bool:
    if isinstance(predicate, AnyOf):
        return any(_matches(row, f) for f in predicate.filters)
    return _matches_filter(row, predicate)


def _matches_filter(row: Mapping[str, Any], f: Filter) -> bool:
    cell = row.get(f.column)
    if f.op == FilterOp.EQ:
        return cell == f.value
    if f.op == FilterOp.IN:
        return cell in f.value
    if cell is None:
        return False
    if f.op == FilterOp.GTE:
        return cell >= f.value
    if f.op == FilterOp.LTE:
        return cell <= f.value
    return str(f.value).lower() in str(cell).lower()
