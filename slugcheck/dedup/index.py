"""Slug index: slug value -> records publishing it."""

from __future__ import annotations

from typing import Dict, Iterable, List

from slugcheck.models import ContentRecord

SlugIndex = Dict[str, List[ContentRecord]]


def build_slug_index(records: Iterable[ContentRecord]) -> SlugIndex:
    """Group records by slug in a single pass.

    Every record lands in exactly one list; per-slug insertion order is kept.
    """
    index: SlugIndex = {}
    for record in records:
        index.setdefault(record.slug, []).append(record)
    return index
