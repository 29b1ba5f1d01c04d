"""Separate real slug collisions from an entity's language variants."""

from __future__ import annotations

from typing import List, Tuple

from slugcheck.dedup.index import SlugIndex
from slugcheck.models import ContentRecord


def distinct_codenames(records: List[ContentRecord]) -> set:
    return {record.codename for record in records}


def is_true_duplicate(records: List[ContentRecord]) -> bool:
    """True when at least two different entities share the slug.

    One entity repeating its slug across languages is expected and does not
    count.
    """
    return len(distinct_codenames(records)) >= 2


def find_true_duplicates(index: SlugIndex) -> List[Tuple[str, List[ContentRecord]]]:
    """Return ``(slug, records)`` pairs for true duplicates, in index order."""
    return [
        (slug, records)
        for slug, records in index.items()
        if is_true_duplicate(records)
    ]
