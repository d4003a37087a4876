"""
CLI: query an existing project index.
  python -m src.catalog search QUERY [--index-file projects_index.json] [--tags-only | --category-only] [--json]
  python -m src.catalog stats [--index-file projects_index.json] [--detailed] [--json]
"""

import argparse
import json
from dataclasses import asdict

from src.indexer.config import get_index_path
from src.indexer.errors import SerializationError
from src.indexer.index_builder import load_index

from .search import search_projects
from .stats import compute_stats, format_project, format_stats


def main() -> None:
    ap = argparse.ArgumentParser(description="Search and summarize an indexed projects collection")
    sub = ap.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search project names, tags or categories")
    search.add_argument("query", help="Text to search for")
    search.add_argument("--index-file", "-i", help="Index JSON (default: $PROJECTS_INDEXER_INDEX or projects_index.json)")
    scope = search.add_mutually_exclusive_group()
    scope.add_argument("--tags-only", "-t", action="store_true", help="Only search in project tags")
    scope.add_argument("--category-only", "-c", action="store_true", help="Only search in project categories")
    search.add_argument("--json", action="store_true", help="Output as JSON")

    stats = sub.add_parser("stats", help="Show statistics about indexed projects")
    stats.add_argument("--index-file", "-i", help="Index JSON (default: $PROJECTS_INDEXER_INDEX or projects_index.json)")
    stats.add_argument("--detailed", "-d", action="store_true", help="Per-category breakdown and all tags")
    stats.add_argument("--json", action="store_true", help="Output as JSON")

    args = ap.parse_args()
    index_path = get_index_path(args.index_file)
    try:
        projects = load_index(index_path)
    except FileNotFoundError:
        print(f"Error: index file not found: {index_path} (run python -m src.orchestration first)")
        raise SystemExit(1)
    except SerializationError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    if args.command == "search":
        found = search_projects(projects, args.query, args.tags_only, args.category_only)
        if args.json:
            print(json.dumps([p.to_dict() for p in found], indent=2))
            return
        print(f"Found {len(found)} of {len(projects)} projects matching '{args.query}'")
        for p in found:
            print(format_project(p))
        return

    result = compute_stats(projects)
    if args.json:
        print(json.dumps(asdict(result), indent=2))
        return
    print(format_stats(result, detailed=args.detailed))


if __name__ == "__main__":
    main()
