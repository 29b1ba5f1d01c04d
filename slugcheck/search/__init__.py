"""Multi-strategy lookup of the entities using one slug."""

from slugcheck.search.merger import (
    SlugSearchMerger,
    remove_duplicate_items,
    search_specific_slug,
)
from slugcheck.search.strategies import (
    AllItemsScan,
    FieldEqualsSearch,
    SearchStrategy,
    build_default_strategies,
)

__all__ = [
    "AllItemsScan",
    "FieldEqualsSearch",
    "SearchStrategy",
    "SlugSearchMerger",
    "build_default_strategies",
    "remove_duplicate_items",
    "search_specific_slug",
]
