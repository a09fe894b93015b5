"""
Constantes del catálogo compartidas por el gateway y la API JSON.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class SortFilterItem:
    """Opción de ordenamiento expuesta por la búsqueda."""

    title: str
    slug: Optional[str]
    sortKey: str
    reverse: bool


DEFAULT_SORT = SortFilterItem(title="Relevance", slug=None, sortKey="RELEVANCE", reverse=False)

SORTING: List[SortFilterItem] = [
    DEFAULT_SORT,
    SortFilterItem(title="Trending", slug="trending-desc", sortKey="BEST_SELLING", reverse=False),
    SortFilterItem(title="Latest Arrivals", slug="latest-desc", sortKey="CREATED_AT", reverse=True),
    SortFilterItem(title="Price Low to High", slug="price-asc", sortKey="PRICE", reverse=False),
    SortFilterItem(title="Price High to Low", slug="price-desc", sortKey="PRICE", reverse=True),
]

_SORTING_BY_SLUG: Dict[str, SortFilterItem] = {item.slug: item for item in SORTING if item.slug}


def resolve_sort(slug: Optional[str]) -> SortFilterItem:
    """Devuelve la opción de orden para un slug; la por defecto si no existe."""
    if not slug:
        return DEFAULT_SORT
    return _SORTING_BY_SLUG.get(slug, DEFAULT_SORT)
