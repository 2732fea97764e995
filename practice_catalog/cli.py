#!/usr/bin/env python3
"""Command-line interface for the practice catalog.

Commands:
  - catalog stats      : Category list with counts and preset bucket stats
  - catalog filter     : Apply query / category / preset and list matches
  - catalog editorial  : Show the filter-free editorial layout

Input is a JSON export of the CMS responses: either a list of practices, or
an object with "practices" and "categories" (each optionally wrapped in a
Strapi {"data": [...]} envelope).

Typical usage:
  python -m practice_catalog.cli stats --input export.json
  python -m practice_catalog.cli filter --input export.json --query nyak --preset short
  python -m practice_catalog.cli editorial --input export.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from practice_catalog.configs.settings import get_settings
from practice_catalog.ingestion.indexer import build_index
from practice_catalog.monitoring.logging import LoggingOptions, setup_logging, with_context
from practice_catalog.normalization.categories import quick_categories
from practice_catalog.schemas.labels import get_labels
from practice_catalog.schemas.practice import CatalogIndex, FilterState, NormalizedPractice, Preset
from practice_catalog.search.editorial import layout_for
from practice_catalog.search.filters import (
    active_filter_count,
    active_label,
    filter_practices,
    preset_chips,
    preset_label,
)

logger = logging.getLogger("practice_catalog.cli")

EDITORIAL_SLOTS = ("hero", "wide", "daily_pick", "tile_right", "tile_bottom_left")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="catalog", description="Practice Catalog CLI")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--locale", default=settings.LOCALE, help="UI label locale (hu, en, de)")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    p.add_argument("--json-logs", action="store_true", default=settings.JSON_LOGS, help="Emit JSON logs")
    sub = p.add_subparsers(dest="cmd")

    # stats
    ps = sub.add_parser("stats", help="Show categories and preset counts")
    ps.add_argument("--input", "-i", required=True, help="Path to CMS JSON export")
    ps.add_argument("--json", action="store_true", help="Print JSON instead of text")

    # filter
    pf = sub.add_parser("filter", help="Filter practices")
    pf.add_argument("--input", "-i", required=True, help="Path to CMS JSON export")
    pf.add_argument("--query", "-q", default="", help="Free-text query")
    pf.add_argument("--category", "-c", default="", help="Category key (slug or name)")
    pf.add_argument(
        "--preset",
        "-p",
        default="",
        choices=[preset.value for preset in Preset if preset.value],
        help="Preset bucket",
    )
    pf.add_argument("--json", action="store_true", help="Print JSON instead of text")

    # editorial
    pe = sub.add_parser("editorial", help="Show the editorial default layout")
    pe.add_argument("--input", "-i", required=True, help="Path to CMS JSON export")
    pe.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return p.parse_args(argv)


def _read_json(path: str) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input not found: {p}")
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def _payload_list(value: Any) -> list:
    if isinstance(value, dict) and "data" in value:
        value = value["data"]
    return value if isinstance(value, list) else []


def load_export(path: str) -> tuple[list, list]:
    """Read a CMS export file into (practices, categories)."""
    data = _read_json(path)
    if isinstance(data, list):
        return data, []
    if isinstance(data, dict):
        if "practices" in data or "categories" in data:
            return _payload_list(data.get("practices")), _payload_list(data.get("categories"))
        return _payload_list(data), []
    return [], []


def _practice_summary(it: NormalizedPractice | None) -> dict[str, Any] | None:
    if it is None:
        return None
    return {
        "slug": it.slug,
        "name": it.name,
        "category": it.primary_cat_label or it.primary_cat,
        "minutes": it.duration_minutes,
        "difficulty": it.difficulty.value,
        "difficulty_label": it.difficulty_card.value if it.difficulty_card else None,
        "video": it.is_video,
        "featured": it.is_featured,
        "thumb": it.thumb.url or None,
    }


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def _cmd_stats(index: CatalogIndex, labels: dict[str, str], as_json: bool) -> int:
    settings = get_settings()
    chips = quick_categories(index.cats, settings.QUICK_CATEGORY_LIMIT)
    presets = {
        p.value: index.preset_stats.count_for(p) for p in Preset if p is not Preset.NONE
    }

    if as_json:
        _print_json(
            {
                "total": index.preset_stats.total,
                "categories": [
                    {"key": c.key, "name": c.name, "count": index.category_counts.get(c.key, 0)}
                    for c in index.cats
                ],
                "quick_categories": [c.key for c in chips],
                "presets": presets,
            }
        )
        return 0

    print(f"{labels['all']}: {index.preset_stats.total} {labels['items_label']}")
    print("-" * 60)
    print(f"{labels['quick_cats'].upper()}")
    for c in index.cats:
        print(f"  {c.name:<40} {index.category_counts.get(c.key, 0):>5}")
    print("-" * 60)
    print(f"{labels['presets_title'].upper()}")
    for preset, count in presets.items():
        print(f"  {preset_label(preset, labels):<40} {count:>5}")
    print("-" * 60)
    chip_text = ", ".join(f"{label} ({count})" for _, label, count in preset_chips(index.preset_stats, labels))
    print(f"Chips: {chip_text}")
    return 0


def _cmd_filter(index: CatalogIndex, labels: dict[str, str], args: argparse.Namespace) -> int:
    state = FilterState(
        query=args.query,
        active_category_key=args.category,
        active_preset=args.preset,
    )
    result = filter_practices(index, state)
    heading = active_label(state, labels, index.cat_label_by_key)

    if args.json:
        _print_json(
            {
                "label": heading,
                "active_filters": active_filter_count(state),
                "count": len(result),
                "results": [_practice_summary(it) for it in result],
            }
        )
        return 0

    print(f"{heading}: {len(result)} {labels['results'].lower()}")
    print("-" * 60)
    if not result:
        print(labels["empty_title"])
        print(labels["empty_desc"])
        return 0
    for it in result:
        print(f"  {it.slug:<32} {it.name}")
    return 0


def _cmd_editorial(index: CatalogIndex, as_json: bool) -> int:
    editorial = layout_for(index, FilterState())
    slots: dict[str, Any] = {
        name: _practice_summary(getattr(editorial, name)) for name in EDITORIAL_SLOTS
    }
    tiles = [
        {"key": t.category.key, "name": t.category.name, "count": t.count}
        for t in editorial.category_tiles
    ]

    if as_json:
        _print_json({**slots, "category_tiles": tiles})
        return 0

    for name, summary in slots.items():
        value = f"{summary['slug']} ({summary['name']})" if summary else "-"
        print(f"{name:<18} {value}")
    for tile in tiles:
        print(f"{'category':<18} {tile['name']} ({tile['count']})")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI with the given arguments."""
    try:
        return _main_impl(argv)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in input: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _main_impl(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.version:
        from practice_catalog import __version__

        print(f"practice-catalog version {__version__}")
        return 0

    if not args.cmd:
        print("Error: Command required. Use --help for usage info.", file=sys.stderr)
        return 1

    setup_logging(LoggingOptions(level=args.log_level, json_logs=args.json_logs))
    log = with_context(logger, source=args.input, command=args.cmd)

    practices, categories = load_export(args.input)
    log.info(f"Loaded {len(practices)} practices and {len(categories)} categories")

    index = build_index(practices, categories)
    labels = get_labels(args.locale)

    if args.cmd == "stats":
        return _cmd_stats(index, labels, args.json)
    if args.cmd == "filter":
        return _cmd_filter(index, labels, args)
    if args.cmd == "editorial":
        return _cmd_editorial(index, args.json)
    return 1


if __name__ == "__main__":
    sys.exit(main())
