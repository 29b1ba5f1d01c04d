"""Pytest configuration and fixtures for slugcheck tests."""

import pytest
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from slugcheck.delivery_async import ContentFetcher
from slugcheck.errors import FetchError
from slugcheck.run_config import DetectionConfig


def make_item(
    codename: str,
    url_slug: Optional[str] = None,
    slug: Optional[str] = None,
    name: Optional[str] = None,
    language: str = "en",
    content_type: str = "page",
) -> Dict[str, Any]:
    """Build a raw Delivery API item."""
    elements: Dict[str, Any] = {}
    if url_slug is not None:
        elements["url_slug"] = {"type": "url_slug", "value": url_slug}
    if slug is not None:
        elements["slug"] = {"type": "url_slug", "value": slug}
    return {
        "system": {
            "name": name if name is not None else codename.replace("_", " ").title(),
            "codename": codename,
            "type": content_type,
            "language": language,
        },
        "elements": elements,
    }


class FakeFetcher(ContentFetcher):
    """In-memory fetcher keyed by language.

    ``failures`` maps a language, or a ``(language, filter_key)`` tuple, to
    the ``FetchError`` message raised for it.
    """

    def __init__(self, items_by_language=None, failures=None):
        self.items_by_language = items_by_language or {}
        self.failures = failures or {}
        self.calls: List[Dict[str, Any]] = []

    async def fetch_items(self, type_id, language, field_names, filters=None):
        self.calls.append(
            {"type_id": type_id, "language": language,
             "field_names": list(field_names), "filters": dict(filters or {})}
        )
        filter_keys = tuple((filters or {}).keys())
        for key in (language, (language,) + filter_keys):
            if key in self.failures:
                raise FetchError(self.failures[key], language=language)

        items = [
            i for i in self.items_by_language.get(language, [])
            if i["system"]["type"] == type_id
        ]
        for field_key, value in (filters or {}).items():
            element = field_key.split(".", 1)[1]
            items = [
                i for i in items
                if (i["elements"].get(element) or {}).get("value") == value
            ]
        return items


@pytest.fixture
def detection_config():
    """Valid per-run configuration for three languages."""
    return DetectionConfig(
        environment_id="11111111-2222-3333-4444-555555555555",
        languages=("de", "en", "zh"),
    )


@pytest.fixture
def invalid_config():
    return DetectionConfig(environment_id="", languages=("en",))
