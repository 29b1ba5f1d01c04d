"""Duplicate slug detection.

Pipeline: fetch per language -> extract records -> index by slug ->
classify true duplicates -> group per entity.
"""

from slugcheck.dedup.detector import detect_duplicates, find_duplicate_slugs
from slugcheck.dedup.extractor import extract_record, has_slug, pick_slug
from slugcheck.dedup.index import build_slug_index

__all__ = [
    "build_slug_index",
    "detect_duplicates",
    "extract_record",
    "find_duplicate_slugs",
    "has_slug",
    "pick_slug",
]
