"""Data classes shared by the detection and search pipelines.

All of them are transient: built for one detection or search invocation and
handed to the presentation layer (``slugcheck.report`` or JSON output).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ContentRecord:
    """Flat view of one fetched content item variant.

    Attributes:
        name: Display name of the item.
        codename: Stable identifier of the entity, shared by all its
            language variants.
        language: Language codename the item was fetched for.
        slug: Slug value picked from the first non-empty slug element.
        slug_field: Codename of the element the slug came from
            (e.g. ``"url_slug"`` or ``"slug"``).
        content_type: Content type codename.
    """

    name: str
    codename: str
    language: str
    slug: str
    slug_field: str
    content_type: str = "page"

    @property
    def dedup_key(self) -> Tuple[str, str]:
        return (self.codename, self.language)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "codename": self.codename,
            "type": self.content_type,
            "language": self.language,
            "slug": self.slug,
            "slugField": self.slug_field,
        }


@dataclass(frozen=True)
class EntitySummary:
    """One entity inside a duplicate group, with every language it appears in."""

    name: str
    codename: str
    languages: Tuple[str, ...]
    slug_field: str

    @property
    def language_list(self) -> str:
        return ", ".join(self.languages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "codename": self.codename,
            "languages": self.language_list,
            "slugField": self.slug_field,
        }


@dataclass
class DuplicateGroup:
    """A slug published by two or more distinct entities."""

    slug: str
    entities: List[EntitySummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "entities": [e.to_dict() for e in self.entities],
        }


@dataclass
class DuplicateDetectionResult:
    """Outcome of a full duplicate scan.

    ``error`` is the failure discriminant: an empty ``duplicates`` list with
    no error is a successful scan that found nothing.
    """

    duplicates: List[DuplicateGroup] = field(default_factory=list)
    total_items: Optional[int] = None
    unique_slugs: Optional[int] = None
    languages: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "duplicates": [d.to_dict() for d in self.duplicates],
        }
        if self.total_items is not None:
            data["totalItems"] = self.total_items
        if self.unique_slugs is not None:
            data["uniqueSlugs"] = self.unique_slugs
        if self.languages:
            data["languages"] = list(self.languages)
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class StrategyOutcome:
    """Result of running a single search strategy.

    Attributes:
        strategy_name: Machine-readable strategy label
            (e.g. ``"field_equals:url_slug:en"``).
        success: ``False`` when the strategy raised; ``items`` is then empty.
        items: Records the strategy matched.
        error: Failure reason when ``success`` is ``False``.
        details: Strategy-specific diagnostics for display.
    """

    strategy_name: str
    success: bool
    items: List[ContentRecord] = field(default_factory=list)
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "strategy": self.strategy_name,
            "success": self.success,
            "items": [i.to_dict() for i in self.items],
        }
        if self.error is not None:
            data["error"] = self.error
        if self.details:
            data["details"] = dict(self.details)
        return data


@dataclass
class SearchResult:
    """Merged answer to "which entities use slug X"."""

    success: bool
    items: List[ContentRecord] = field(default_factory=list)
    method: str = "combined-delivery"
    total_items: Optional[int] = None
    error: Optional[str] = None
    outcomes: List[StrategyOutcome] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "items": [i.to_dict() for i in self.items],
            "method": self.method,
        }
        if self.total_items is not None:
            data["totalItems"] = self.total_items
        if self.error is not None:
            data["error"] = self.error
        if self.outcomes:
            data["strategies"] = [o.to_dict() for o in self.outcomes]
        return data
