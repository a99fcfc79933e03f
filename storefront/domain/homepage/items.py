from collections import defaultdict
from typing import Dict, Iterable, List

from .schemas import SectionItem


def _sort_key(item: SectionItem):
    return (item.display_order, item.id)


class SectionItemResolver:
    """Active items of each section in (display_order, id) order.

    Items are grouped once on construction; resolve() is a lookup.
    """

    def __init__(self, items: Iterable[SectionItem]):
        grouped: Dict[str, List[SectionItem]] = defaultdict(list)
        for item in items:
            if item.is_active:
                grouped[item.section_id].append(item)
        self._by_section = {section_id: sorted(group, key=_sort_key) for section_id, group in grouped.items()}

    def resolve(self, section_id: str) -> List[SectionItem]:
        return list(self._by_section.get(str(section_id), ()))


def resolve_items(section_id: str, items: Iterable[SectionItem]) -> List[SectionItem]:
    return SectionItemResolver(items).resolve(section_id)
