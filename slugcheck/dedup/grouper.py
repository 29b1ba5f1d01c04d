"""Collapse per-language records into one summary row per entity."""

from __future__ import annotations

from typing import Dict, List

from slugcheck.models import ContentRecord, DuplicateGroup, EntitySummary


def group_by_codename(records: List[ContentRecord]) -> List[EntitySummary]:
    """Build one ``EntitySummary`` per distinct codename.

    ``name`` and ``slug_field`` come from the first record of each codename;
    ``languages`` lists each language once, in first-seen order.
    """
    grouped: Dict[str, List[ContentRecord]] = {}
    for record in records:
        grouped.setdefault(record.codename, []).append(record)

    summaries = []
    for codename, entity_records in grouped.items():
        first = entity_records[0]
        languages = tuple(dict.fromkeys(r.language for r in entity_records))
        summaries.append(
            EntitySummary(
                name=first.name,
                codename=codename,
                languages=languages,
                slug_field=first.slug_field,
            )
        )
    return summaries


def build_duplicate_group(
    slug: str, records: List[ContentRecord], sort_entities: bool = False
) -> DuplicateGroup:
    entities = group_by_codename(records)
    if sort_entities:
        entities.sort(key=lambda e: e.codename)
    return DuplicateGroup(slug=slug, entities=entities)
