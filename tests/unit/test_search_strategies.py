"""Unit tests for the individual slug search strategies."""

import pytest

from conftest import FakeFetcher, make_item
from slugcheck.search.strategies import (
    AllItemsScan,
    FieldEqualsSearch,
    SearchStrategy,
    build_default_strategies,
)
from slugcheck.run_config import DetectionConfig


class TestFieldEqualsSearch:
    def test_name(self):
        assert FieldEqualsSearch("url_slug", "en").name == "field_equals:url_slug:en"

    @pytest.mark.asyncio
    async def test_filters_on_field(self, detection_config):
        fetcher = FakeFetcher({
            "en": [
                make_item("contact-page", url_slug="contact"),
                make_item("other", url_slug="other"),
            ],
        })
        outcome = await FieldEqualsSearch("url_slug", "en").run(
            fetcher, "contact", detection_config
        )

        assert outcome.success is True
        assert [r.codename for r in outcome.items] == ["contact-page"]
        assert fetcher.calls[0]["filters"] == {"elements.url_slug": "contact"}

    @pytest.mark.asyncio
    async def test_records_show_the_matched_field(self, detection_config):
        fetcher = FakeFetcher({
            "en": [make_item("contact-page", url_slug="other", slug="contact")],
        })
        outcome = await FieldEqualsSearch("slug", "en").run(
            fetcher, "contact", detection_config
        )

        assert len(outcome.items) == 1
        assert outcome.items[0].slug == "contact"
        assert outcome.items[0].slug_field == "slug"

    @pytest.mark.asyncio
    async def test_failure_becomes_outcome(self, detection_config):
        fetcher = FakeFetcher(failures={("en", "elements.slug"): "invalid element"})
        outcome = await FieldEqualsSearch("slug", "en").run(
            fetcher, "contact", detection_config
        )

        assert outcome.success is False
        assert outcome.items == []
        assert outcome.error == "invalid element"


class TestAllItemsScan:
    @pytest.mark.asyncio
    async def test_exact_matches_and_diagnostics(self, detection_config):
        fetcher = FakeFetcher({
            "en": [
                make_item("contact-page", url_slug="contact"),
                make_item("contact-us", url_slug="Contact-Us"),
                make_item("about", url_slug="about"),
                make_item("draft"),
            ],
            "de": [make_item("contact-page", url_slug="contact", language="de")],
        })
        outcome = await AllItemsScan().run(fetcher, "contact", detection_config)

        assert outcome.success is True
        assert [(r.codename, r.language) for r in outcome.items] == [
            ("contact-page", "de"),
            ("contact-page", "en"),
        ]
        assert outcome.details["totalItems"] == 4
        assert outcome.details["exactMatches"] == 2
        assert outcome.details["allSlugsCount"] == 3
        assert outcome.details["similarSlugs"] == ["contact", "Contact-Us"]

    @pytest.mark.asyncio
    async def test_similar_slugs_limited(self):
        config = DetectionConfig(environment_id="env", languages=("en",), similar_slugs_limit=2)
        fetcher = FakeFetcher({
            "en": [make_item(f"news-{i}", url_slug=f"news-{i}") for i in range(5)],
        })
        outcome = await AllItemsScan().run(fetcher, "news", config)

        assert outcome.items == []
        assert outcome.details["similarSlugs"] == ["news-0", "news-1"]

    @pytest.mark.asyncio
    async def test_any_language_failure_fails_strategy(self, detection_config):
        fetcher = FakeFetcher(failures={"zh": "timeout"})
        outcome = await AllItemsScan().run(fetcher, "contact", detection_config)

        assert outcome.success is False
        assert outcome.error == "timeout"


class TestBuildDefaultStrategies:
    def test_order_and_coverage(self, detection_config):
        strategies = build_default_strategies(detection_config)

        assert all(isinstance(s, SearchStrategy) for s in strategies)
        assert [s.name for s in strategies] == [
            "field_equals:url_slug:de",
            "field_equals:slug:de",
            "field_equals:url_slug:en",
            "field_equals:slug:en",
            "field_equals:url_slug:zh",
            "field_equals:slug:zh",
            "all_items_scan",
        ]
