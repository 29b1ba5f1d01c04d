"""Orchestrator for the duplicate-slug scan.

``find_duplicate_slugs`` fetches every item of the configured content type
in each language (one language at a time), flattens them into
``ContentRecord`` values, indexes them by slug, and keeps only slugs that
two or more distinct entities share.
"""

from __future__ import annotations

from typing import List, Optional

from slugcheck.dedup.classifier import find_true_duplicates
from slugcheck.dedup.extractor import extract_record, has_slug
from slugcheck.dedup.grouper import build_duplicate_group
from slugcheck.dedup.index import build_slug_index
from slugcheck.delivery_async import AsyncDeliveryClient, ContentFetcher
from slugcheck.errors import MISSING_CONFIG_MESSAGE, ConfigurationError, FetchError
from slugcheck.models import ContentRecord, DuplicateDetectionResult, DuplicateGroup
from slugcheck.performance import get_performance_metrics
from slugcheck.run_config import DetectionConfig
from slugcheck.utils.logger import log_debug, log_error, log_info, log_progress



async def fetch_records_with_slugs(
    fetcher: ContentFetcher, config: DetectionConfig
) -> List[ContentRecord]:
    """Fetch slug-bearing items for every configured language.

    Languages are fetched sequentially.  A ``FetchError`` for any language
    propagates and aborts the scan.
    """
    records: List[ContentRecord] = []
    log_info("Languages to search", languages=list(config.languages))

    for language in config.languages:
        items = await fetcher.fetch_items(
            config.content_type, language, list(config.slug_fields)
        )
        with_slugs = [item for item in items if has_slug(item, config.slug_fields)]
        records.extend(
            extract_record(item, language, config.slug_fields, config.content_type)
            for item in with_slugs
        )
        log_info(
            "Fetched items with slugs",
            language=language,
            fetched=len(items),
            with_slugs=len(with_slugs),
        )

    log_info("Total items with slugs", total=len(records))
    return records


def detect_duplicates(
    records: List[ContentRecord], sort_groups: bool = False
) -> DuplicateDetectionResult:
    """Run index, classify and group over already-fetched records."""
    index = build_slug_index(records)
    groups: List[DuplicateGroup] = [
        build_duplicate_group(slug, slug_records, sort_entities=sort_groups)
        for slug, slug_records in find_true_duplicates(index)
    ]
    if sort_groups:
        groups.sort(key=lambda g: g.slug)

    return DuplicateDetectionResult(
        duplicates=groups,
        total_items=len(records),
        unique_slugs=len(index),
    )


def log_duplicate_results(groups: List[DuplicateGroup]) -> None:
    log_info(f"Found {len(groups)} TRUE duplicate slugs")
    for group in groups:
        log_info(
            f"Slug '{group.slug}': {len(group.entities)} different content items",
            entities=[
                {"codename": e.codename, "name": e.name, "languages": e.language_list}
                for e in group.entities
            ],
        )


async def find_duplicate_slugs(
    config: DetectionConfig,
    fetcher: Optional[ContentFetcher] = None,
    sort_groups: bool = False,
) -> DuplicateDetectionResult:
    """Scan all configured languages for slugs shared by distinct entities.

    Args:
        config: Settings for this run.
        fetcher: Content source.  Defaults to an ``AsyncDeliveryClient``
            built from ``config``.
        sort_groups: Sort groups by slug and entities by codename.

    Returns:
        ``DuplicateDetectionResult``.  On a missing configuration or a fetch
        failure ``error`` is set and ``duplicates`` is empty.
    """
    if not config.is_valid():
        log_error("Duplicate scan skipped: configuration invalid")
        return DuplicateDetectionResult(error=MISSING_CONFIG_MESSAGE)

    metrics = get_performance_metrics()
    metrics.start_timer("find_duplicate_slugs")
    log_progress("Finding duplicate slugs", languages=list(config.languages))

    try:
        if fetcher is None:
            async with AsyncDeliveryClient(config) as client:
                records = await fetch_records_with_slugs(client, config)
        else:
            records = await fetch_records_with_slugs(fetcher, config)
    except ConfigurationError as e:
        metrics.end_timer("find_duplicate_slugs")
        return DuplicateDetectionResult(error=e.message)
    except FetchError as e:
        metrics.end_timer("find_duplicate_slugs")
        log_error("Duplicate search error", error=e.message, language=e.language)
        return DuplicateDetectionResult(error=f"Unexpected error: {e.message}")
    except Exception as e:
        metrics.end_timer("find_duplicate_slugs")
        log_error("Duplicate search error", error=str(e))
        return DuplicateDetectionResult(error=f"Unexpected error: {e}")

    result = detect_duplicates(records, sort_groups=sort_groups)
    result.languages = list(config.languages)

    log_duplicate_results(result.duplicates)
    duration = metrics.end_timer("find_duplicate_slugs")
    log_debug(
        "Duplicate scan finished",
        total_items=result.total_items,
        unique_slugs=result.unique_slugs,
        duration_ms=round(duration * 1000, 2),
    )
    return result
