"""Individual slug lookup strategies.

Each strategy implements ``SearchStrategy``: ``search`` does the lookup and
may raise, while ``run`` wraps it into a ``StrategyOutcome`` so a failing
strategy reports its reason instead of aborting its siblings.
"""

from __future__ import annotations

import abc
import dataclasses
from typing import Any, Dict, List, Sequence, Tuple

from slugcheck.dedup.extractor import extract_record, has_slug
from slugcheck.delivery_async import ContentFetcher
from slugcheck.models import ContentRecord, StrategyOutcome
from slugcheck.run_config import DetectionConfig
from slugcheck.utils.logger import log_error, log_info

StrategyData = Tuple[List[ContentRecord], Dict[str, Any]]

# ---------------------------------------------------------------------------
# Base protocol
# ---------------------------------------------------------------------------


class SearchStrategy(abc.ABC):
    """Abstract base for slug lookup strategies."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short machine-readable name for logs and diagnostics."""

    @abc.abstractmethod
    async def search(
        self, fetcher: ContentFetcher, target_slug: str, config: DetectionConfig
    ) -> StrategyData:
        """Look up ``target_slug``.

        Returns:
            ``(records, details)``.  ``details`` carries diagnostics for display.
        """

    async def run(
        self, fetcher: ContentFetcher, target_slug: str, config: DetectionConfig
    ) -> StrategyOutcome:
        """Run the strategy, turning any exception into a failed outcome."""
        try:
            items, details = await self.search(fetcher, target_slug, config)
        except Exception as e:
            log_error("Search strategy failed", strategy=self.name, error=str(e))
            return StrategyOutcome(strategy_name=self.name, success=False, error=str(e))

        log_info("Search strategy finished", strategy=self.name, found=len(items))
        return StrategyOutcome(
            strategy_name=self.name, success=True, items=items, details=details
        )


# ---------------------------------------------------------------------------
# Strategy 1 – Equality filter on one slug element in one language
# ---------------------------------------------------------------------------


class FieldEqualsSearch(SearchStrategy):
    """Ask the Delivery API for items whose ``field_name`` equals the slug.

    One instance covers one (field, language) pair so a rejected filter on
    one element (e.g. the content type lacks it) only loses that pair.
    """

    def __init__(self, field_name: str, language: str):
        self.field_name = field_name
        self.language = language

    @property
    def name(self) -> str:
        return f"field_equals:{self.field_name}:{self.language}"

    async def search(
        self, fetcher: ContentFetcher, target_slug: str, config: DetectionConfig
    ) -> StrategyData:
        items = await fetcher.fetch_items(
            config.content_type,
            self.language,
            list(config.slug_fields),
            filters={f"elements.{self.field_name}": target_slug},
        )
        # The filter matched on this field, whatever the primary slug field holds
        records = [
            dataclasses.replace(
                extract_record(item, self.language, config.slug_fields, config.content_type),
                slug=target_slug,
                slug_field=self.field_name,
            )
            for item in items
        ]
        return records, {"field": self.field_name, "language": self.language}


# ---------------------------------------------------------------------------
# Strategy 2 – Full scan with client-side matching
# ---------------------------------------------------------------------------


class AllItemsScan(SearchStrategy):
    """Fetch every slug-bearing item and match the slug client-side.

    Catches items the equality filter misses and reports similar slugs
    (case-insensitive substring) to help spot near-collisions.
    """

    def __init__(self, languages: Sequence[str] = ()):
        self.languages = tuple(languages)

    @property
    def name(self) -> str:
        return "all_items_scan"

    async def search(
        self, fetcher: ContentFetcher, target_slug: str, config: DetectionConfig
    ) -> StrategyData:
        languages = self.languages or config.languages
        all_records: List[ContentRecord] = []

        for language in languages:
            items = await fetcher.fetch_items(
                config.content_type, language, list(config.slug_fields)
            )
            all_records.extend(
                extract_record(item, language, config.slug_fields, config.content_type)
                for item in items
                if has_slug(item, config.slug_fields)
            )

        all_slugs = list(dict.fromkeys(r.slug for r in all_records))
        exact_matches = [r for r in all_records if r.slug == target_slug]
        needle = target_slug.lower()
        similar = [s for s in all_slugs if needle in s.lower()]

        details = {
            "totalItems": len(all_records),
            "exactMatches": len(exact_matches),
            "allSlugsCount": len(all_slugs),
            "similarSlugs": similar[: config.similar_slugs_limit],
        }
        return exact_matches, details


def build_default_strategies(config: DetectionConfig) -> List[SearchStrategy]:
    """Equality lookups for every (language, slug field), then the full scan."""
    strategies: List[SearchStrategy] = [
        FieldEqualsSearch(field_name, language)
        for language in config.languages
        for field_name in config.slug_fields
    ]
    strategies.append(AllItemsScan(config.languages))
    return strategies
