"""Turn raw Delivery API items into flat ``ContentRecord`` values.

This is the only place that reads the loosely-typed item payload; everything
downstream works on ``ContentRecord``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from slugcheck.models import ContentRecord

UNKNOWN_PLACEHOLDER = "Unknown"
NO_SLUG_PLACEHOLDER = "No slug"


def element_value(item: Dict[str, Any], field_name: str) -> str:
    """Return the string value of element ``field_name`` or ``""``."""
    if not isinstance(item, dict):
        return ""
    elements = item.get("elements") or {}
    element = elements.get(field_name) if isinstance(elements, dict) else None
    if not isinstance(element, dict):
        return ""
    value = element.get("value")
    return value if isinstance(value, str) else ""


def pick_slug(
    item: Dict[str, Any], slug_fields: Sequence[str]
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(slug, field_name)`` for the first non-empty slug element.

    Empty strings count as absent.  Returns ``(None, None)`` when no field
    carries a value.
    """
    for field_name in slug_fields:
        value = element_value(item, field_name)
        if value:
            return value, field_name
    return None, None


def has_slug(item: Dict[str, Any], slug_fields: Sequence[str]) -> bool:
    slug, _ = pick_slug(item, slug_fields)
    return slug is not None


def _system_text(system: Dict[str, Any], key: str, default: str) -> str:
    value = system.get(key)
    return value if isinstance(value, str) and value else default


def extract_record(
    item: Dict[str, Any],
    language: str,
    slug_fields: Sequence[str],
    default_type: str = "page",
) -> ContentRecord:
    """Build a ``ContentRecord`` from one raw item fetched for ``language``.

    Callers filter out slug-less items with ``has_slug`` first; if one slips
    through it gets a placeholder slug instead of an exception.
    """
    system = (item.get("system") if isinstance(item, dict) else None) or {}
    if not isinstance(system, dict):
        system = {}

    slug, field_name = pick_slug(item, slug_fields)
    if slug is None:
        slug = NO_SLUG_PLACEHOLDER
        field_name = slug_fields[-1] if slug_fields else ""

    return ContentRecord(
        name=_system_text(system, "name", UNKNOWN_PLACEHOLDER),
        codename=_system_text(system, "codename", UNKNOWN_PLACEHOLDER),
        language=language,
        slug=slug,
        slug_field=field_name,
        content_type=_system_text(system, "type", default_type),
    )
