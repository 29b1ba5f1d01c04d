"""Run every search strategy for one slug and merge their results.

Strategies run sequentially.  Each contributes a ``StrategyOutcome``; the
merged item list is the concatenation of all successful outcomes,
deduplicated on ``(codename, language)`` with the first record winning.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from slugcheck.delivery_async import AsyncDeliveryClient, ContentFetcher
from slugcheck.errors import MISSING_CONFIG_MESSAGE
from slugcheck.models import ContentRecord, SearchResult, StrategyOutcome
from slugcheck.performance import get_performance_metrics
from slugcheck.run_config import DetectionConfig
from slugcheck.search.strategies import SearchStrategy, build_default_strategies
from slugcheck.utils.logger import log_debug, log_error, log_info, log_progress

COMBINED_METHOD = "combined-delivery"
EMPTY_SLUG_MESSAGE = "Please enter a slug to search."


def remove_duplicate_items(items: Iterable[ContentRecord]) -> List[ContentRecord]:
    """Keep the first record for each ``(codename, language)`` pair."""
    seen = set()
    unique: List[ContentRecord] = []
    for item in items:
        if item.dedup_key in seen:
            continue
        seen.add(item.dedup_key)
        unique.append(item)
    return unique


def merge_outcomes(outcomes: Iterable[StrategyOutcome]) -> List[ContentRecord]:
    combined: List[ContentRecord] = []
    for outcome in outcomes:
        combined.extend(outcome.items)
    return remove_duplicate_items(combined)


class SlugSearchMerger:
    """Run a list of strategies for one slug and merge their outcomes.

    Args:
        strategies: Strategies to run, in order.  Defaults to
            ``build_default_strategies(config)`` at search time if *None*.

    Usage::

        merger = SlugSearchMerger()
        result = await merger.search("contact", config, fetcher)
    """

    def __init__(self, strategies: Optional[List[SearchStrategy]] = None):
        self.strategies = strategies

    async def run_strategies(
        self, fetcher: ContentFetcher, target_slug: str, config: DetectionConfig
    ) -> List[StrategyOutcome]:
        strategies = (
            self.strategies
            if self.strategies is not None
            else build_default_strategies(config)
        )
        log_debug("Starting slug search strategies", strategy_count=len(strategies))

        outcomes = []
        for strategy in strategies:
            outcomes.append(await strategy.run(fetcher, target_slug, config))
        return outcomes

    async def search(
        self,
        target_slug: str,
        config: DetectionConfig,
        fetcher: Optional[ContentFetcher] = None,
    ) -> SearchResult:
        """Find every entity using ``target_slug`` across configured languages.

        Returns a successful ``SearchResult`` even when some (or all)
        strategies failed; their reasons are kept in ``outcomes``.  Only an
        invalid configuration, a blank slug, or an error outside the
        strategies produces ``success=False``.
        """
        if not config.is_valid():
            log_error("Slug search skipped: configuration invalid")
            return SearchResult(success=False, error=MISSING_CONFIG_MESSAGE, method="none")

        target_slug = (target_slug or "").strip()
        if not target_slug:
            return SearchResult(success=False, error=EMPTY_SLUG_MESSAGE, method="none")

        metrics = get_performance_metrics()
        metrics.start_timer("search_specific_slug")
        log_progress(
            f"Searching for slug '{target_slug}'", languages=list(config.languages)
        )

        try:
            if fetcher is None:
                async with AsyncDeliveryClient(config) as client:
                    outcomes = await self.run_strategies(client, target_slug, config)
            else:
                outcomes = await self.run_strategies(fetcher, target_slug, config)
        except Exception as e:
            metrics.end_timer("search_specific_slug")
            log_error("Slug search error", error=str(e))
            return SearchResult(
                success=False, error=f"Unexpected error: {e}", method="error"
            )

        items = merge_outcomes(outcomes)
        failed = [o.strategy_name for o in outcomes if not o.success]
        duration = metrics.end_timer("search_specific_slug")
        log_info(
            "Slug search finished",
            slug=target_slug,
            items=len(items),
            strategies=len(outcomes),
            failed_strategies=failed,
            duration_ms=round(duration * 1000, 2),
        )

        return SearchResult(
            success=True,
            items=items,
            method=COMBINED_METHOD,
            total_items=len(items),
            outcomes=outcomes,
        )


async def search_specific_slug(
    target_slug: str,
    config: DetectionConfig,
    fetcher: Optional[ContentFetcher] = None,
    strategies: Optional[List[SearchStrategy]] = None,
) -> SearchResult:
    """Convenience wrapper around ``SlugSearchMerger.search``."""
    return await SlugSearchMerger(strategies).search(target_slug, config, fetcher)
