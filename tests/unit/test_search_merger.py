"""Unit tests for the multi-strategy slug search merger."""

import pytest

from conftest import FakeFetcher, make_item
from slugcheck.errors import MISSING_CONFIG_MESSAGE
from slugcheck.models import ContentRecord, StrategyOutcome
from slugcheck.search.merger import (
    COMBINED_METHOD,
    EMPTY_SLUG_MESSAGE,
    SlugSearchMerger,
    merge_outcomes,
    remove_duplicate_items,
    search_specific_slug,
)
from slugcheck.search.strategies import FieldEqualsSearch, SearchStrategy


class StaticStrategy(SearchStrategy):
    """Strategy returning fixed records, or raising when ``error`` is set."""

    def __init__(self, label, records=(), error=None):
        self.label = label
        self.records = list(records)
        self.error = error

    @property
    def name(self):
        return self.label

    async def search(self, fetcher, target_slug, config):
        if self.error:
            raise self.error
        return self.records, {}


def _record(codename, language="en", field="url_slug"):
    return ContentRecord(
        name=codename, codename=codename, language=language,
        slug="contact", slug_field=field,
    )


class TestRemoveDuplicateItems:
    def test_first_record_wins(self):
        first = _record("article-a", field="url_slug")
        second = _record("article-a", field="slug")
        assert remove_duplicate_items([first, second]) == [first]

    def test_language_is_part_of_key(self):
        records = [_record("article-a", "en"), _record("article-a", "de")]
        assert remove_duplicate_items(records) == records

    def test_merge_outcomes_skips_failed(self):
        outcomes = [
            StrategyOutcome("one", True, [_record("a")]),
            StrategyOutcome("two", False, error="boom"),
            StrategyOutcome("three", True, [_record("a"), _record("b")]),
        ]
        assert [r.codename for r in merge_outcomes(outcomes)] == ["a", "b"]


class TestSlugSearchMerger:
    @pytest.mark.asyncio
    async def test_same_key_different_provenance_merged(self, detection_config):
        merger = SlugSearchMerger([
            StaticStrategy("primary", [_record("article-a", field="url_slug")]),
            StaticStrategy("secondary", [_record("article-a", field="slug")]),
        ])
        result = await merger.search("contact", detection_config, FakeFetcher())

        assert result.success is True
        assert len(result.items) == 1
        assert result.items[0].slug_field == "url_slug"
        assert result.total_items == 1
        assert result.method == COMBINED_METHOD

    @pytest.mark.asyncio
    async def test_failing_strategy_isolated(self, detection_config):
        merger = SlugSearchMerger([
            StaticStrategy("broken", error=RuntimeError("network down")),
            StaticStrategy("working", [_record("article-b")]),
        ])
        result = await merger.search("contact", detection_config, FakeFetcher())

        assert result.success is True
        assert [r.codename for r in result.items] == ["article-b"]
        assert [o.success for o in result.outcomes] == [False, True]
        assert result.outcomes[0].error == "network down"

    @pytest.mark.asyncio
    async def test_all_strategies_fail_is_still_success(self, detection_config):
        merger = SlugSearchMerger([
            StaticStrategy("a", error=RuntimeError("x")),
            StaticStrategy("b", error=RuntimeError("y")),
        ])
        result = await merger.search("contact", detection_config, FakeFetcher())

        assert result.success is True
        assert result.items == []
        assert result.error is None

    @pytest.mark.asyncio
    async def test_invalid_config_runs_nothing(self, invalid_config):
        fetcher = FakeFetcher()
        result = await search_specific_slug("contact", invalid_config, fetcher)

        assert result.success is False
        assert result.error == MISSING_CONFIG_MESSAGE
        assert result.method == "none"
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_blank_slug_rejected(self, detection_config):
        fetcher = FakeFetcher()
        result = await search_specific_slug("   ", detection_config, fetcher)

        assert result.success is False
        assert result.error == EMPTY_SLUG_MESSAGE
        assert fetcher.calls == []


class TestSearchSpecificSlugDefaults:
    @pytest.mark.asyncio
    async def test_default_strategies_end_to_end(self, detection_config):
        fetcher = FakeFetcher(
            {
                "en": [
                    make_item("contact-page", url_slug="contact"),
                    make_item("legacy-contact", slug="contact"),
                ],
                "de": [make_item("contact-page", url_slug="contact", language="de")],
            },
            failures={("zh", "elements.slug"): "unknown element"},
        )
        result = await search_specific_slug("contact", detection_config, fetcher)

        assert result.success is True
        assert sorted((r.codename, r.language) for r in result.items) == [
            ("contact-page", "de"),
            ("contact-page", "en"),
            ("legacy-contact", "en"),
        ]
        assert len(result.outcomes) == 7
        failed = [o.strategy_name for o in result.outcomes if not o.success]
        assert failed == ["field_equals:slug:zh"]
        assert result.to_dict()["totalItems"] == 3

    @pytest.mark.asyncio
    async def test_explicit_strategies(self, detection_config):
        fetcher = FakeFetcher({"en": [make_item("contact-page", url_slug="contact")]})
        result = await search_specific_slug(
            "contact", detection_config, fetcher,
            strategies=[FieldEqualsSearch("url_slug", "en")],
        )

        assert [o.strategy_name for o in result.outcomes] == ["field_equals:url_slug:en"]
        assert len(fetcher.calls) == 1
