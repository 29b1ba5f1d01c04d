"""Main entry point for the Kontent.ai duplicate slug checker.

Loads environment variables, builds a per-run configuration, and either scans
all configured languages for duplicate slugs or looks up the content items
using one slug.
"""
from dotenv import load_dotenv
import argparse
import asyncio
import json
import sys

# Load environment variables first, before any other imports
load_dotenv()

from slugcheck.config import get_config
from slugcheck.dedup import find_duplicate_slugs
from slugcheck.performance import log_performance_summary
from slugcheck.report import (
    render_configuration,
    render_duplicate_results,
    render_search_results,
)
from slugcheck.run_config import DetectionConfig
from slugcheck.search import search_specific_slug
from slugcheck.utils.logger import log_error, set_log_level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find duplicate URL slugs in Kontent.ai content.")
    sub = parser.add_subparsers(dest="command", required=True)

    dup = sub.add_parser("duplicates", help="Scan all items for slugs shared by different content items.")
    dup.add_argument('--languages', type=str, help='Comma-separated languages (defaults to KONTENT_LANGUAGES).')
    dup.add_argument('--sort', action='store_true', help='Sort groups by slug and items by codename.')
    dup.add_argument('--json', dest='as_json', action='store_true', help='Print the result as JSON.')

    search = sub.add_parser("search", help="Find the content items using one slug.")
    search.add_argument('slug', type=str, help='Slug to look up.')
    search.add_argument('--languages', type=str, help='Comma-separated languages (defaults to KONTENT_LANGUAGES).')
    search.add_argument('--json', dest='as_json', action='store_true', help='Print the result as JSON.')

    sub.add_parser("config", help="Show the active configuration.")
    return parser


def _split_languages(value):
    if not value:
        return None
    return [lang.strip() for lang in value.split(",") if lang.strip()]


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    set_log_level(config.log_level)

    if args.command == "config":
        print(render_configuration(config))
        return 0 if config.is_config_valid() else 1

    config.log_configuration()
    run_config = DetectionConfig.from_config(config, _split_languages(args.languages))

    if args.command == "duplicates":
        result = asyncio.run(find_duplicate_slugs(run_config, sort_groups=args.sort))
        output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False) if args.as_json \
            else render_duplicate_results(result)
        failed = result.error is not None
    else:
        if not args.slug.strip():
            print("⚠️  Please enter a slug to search.")
            return 1
        result = asyncio.run(search_specific_slug(args.slug, run_config))
        output = json.dumps(result.to_dict(), indent=2, ensure_ascii=False) if args.as_json \
            else render_search_results(result, args.slug.strip())
        failed = not result.success

    print(output)
    log_performance_summary()

    if failed:
        log_error("Run finished with an error", command=args.command)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
