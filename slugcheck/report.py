"""Plain-text rendering of detection, search and configuration results."""

from __future__ import annotations

from typing import List

from slugcheck.config import Config
from slugcheck.models import DuplicateDetectionResult, SearchResult, StrategyOutcome


def render_configuration(config: Config) -> str:
    status = config.get_config_status()
    languages = config.get_configured_languages()
    configured = bool(config.kontent_languages.strip())
    lines = [
        "📋 Configuration",
        f"  Project ID:      {status['project_id'] or '❌ NOT SET'}",
        f"  Environment ID:  {status['environment_id'] or '❌ NOT SET'}",
        f"  Delivery key:    {'set' if config.kontent_delivery_api_key else 'not set'}",
        f"  Management key:  {'set' if config.kontent_management_api_key else 'not set'}",
        f"  Content type:    {config.kontent_content_type}",
        f"  Slug fields:     {', '.join(config.get_slug_fields())}",
        "  Languages:       "
        + (", ".join(languages) if configured else f"Using default: {languages[0]}"),
    ]
    issues = config.validate_configuration()
    if issues:
        lines.append("")
        lines.append("❌ Configuration issues found:")
        lines.extend(f"  - {issue}" for issue in issues)
    return "\n".join(lines)


def render_duplicate_results(result: DuplicateDetectionResult) -> str:
    if result.error:
        return f"❌ {result.error}"

    lines: List[str] = []
    if result.languages:
        lines.append(f"🌐 Languages searched: {', '.join(result.languages)}")
    lines.append(
        f"Scanned {result.total_items or 0} items with "
        f"{result.unique_slugs or 0} unique slugs."
    )

    if not result.duplicates:
        lines.append("✅ No duplicate slugs found.")
        return "\n".join(lines)

    lines.append(f"⚠️  Found {len(result.duplicates)} duplicate slug(s):")
    for group in result.duplicates:
        lines.append("")
        lines.append(f"  Slug: {group.slug} ({len(group.entities)} content items)")
        for entity in group.entities:
            lines.append(
                f"    - {entity.name} ({entity.codename}) "
                f"[{entity.slug_field}] languages: {entity.language_list}"
            )
    return "\n".join(lines)


def _render_outcome(outcome: StrategyOutcome) -> List[str]:
    if not outcome.success:
        return [f"    ✗ {outcome.strategy_name}: failed ({outcome.error})"]

    lines = [f"    ✓ {outcome.strategy_name}: {len(outcome.items)} item(s)"]
    similar = outcome.details.get("similarSlugs")
    if "totalItems" in outcome.details:
        lines.append(
            f"      scanned {outcome.details['totalItems']} items, "
            f"{outcome.details.get('allSlugsCount', 0)} unique slugs"
        )
    if similar:
        lines.append(f"      similar slugs: {', '.join(similar)}")
    return lines


def render_search_results(result: SearchResult, target_slug: str) -> str:
    if not result.success:
        return f"❌ {result.error}"

    lines = [f"🔍 Results for slug '{target_slug}' ({result.method})"]
    if not result.items:
        lines.append("  No content items use this slug.")
    for item in result.items:
        lines.append(
            f"  - {item.name} ({item.codename}) "
            f"language: {item.language}, field: {item.slug_field}, slug: {item.slug}"
        )

    if result.outcomes:
        lines.append("")
        lines.append("  Strategies:")
        for outcome in result.outcomes:
            lines.extend(_render_outcome(outcome))
    return "\n".join(lines)
