"""
CLI: index projects (walk → categorize → git status → Ollama tags → JSON).
  python -m src.orchestration --projects-dir ~/projects --output projects_index.json [--ollama]
"""

import argparse
import json
from pathlib import Path

from src.catalog import compute_stats, format_project, format_stats
from src.indexer.config import (
    DEFAULT_INDEX_FILE,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MIN_DEPTH,
    DEFAULT_PROJECTS_DIR,
    IndexerConfig,
    get_model_name,
)
from src.indexer.log_setup import setup_logging
from src.indexer.walker import DEFAULT_EXCLUDED, parse_exclusions

from .pipeline import run_indexing


def main() -> None:
    ap = argparse.ArgumentParser(
        description="Index projects: scan a directory, detect git status, generate tags (Ollama), save JSON"
    )
    ap.add_argument("--projects-dir", "-d", default=DEFAULT_PROJECTS_DIR, type=Path, help="Directory containing projects")
    ap.add_argument("--output", "-o", default=DEFAULT_INDEX_FILE, type=Path, help="JSON file to store the project index")
    ap.add_argument("--min-depth", "-m", type=int, default=DEFAULT_MIN_DEPTH, help="Minimum directory depth of a project")
    ap.add_argument("--max-depth", "-x", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum directory depth to traverse")
    ap.add_argument(
        "--exclude", "-e",
        default=",".join(sorted(DEFAULT_EXCLUDED)),
        help="Directories to exclude (comma-separated)",
    )
    ap.add_argument("--category-level", type=int, default=1, help="Which folder below the root names the category")
    ap.add_argument("--ollama", action="store_true", help="Generate tags with Ollama")
    ap.add_argument("--model", help="Ollama model (default: $PROJECTS_INDEXER_MODEL or gemma3:1b)")
    ap.add_argument("--ollama-host", help="Ollama host (default: $OLLAMA_HOST or localhost:11434)")
    ap.add_argument("--pull-model", action="store_true", help="Pull the Ollama model if it is missing (may be a large download)")
    ap.add_argument("--default-tags", default="", help="Tags used when Ollama is off or fails (comma-separated)")
    ap.add_argument("--workers", type=int, default=1, help="Parallel status/tag workers (default: 1)")
    ap.add_argument("--archive-after-days", type=int, help="Mark repos with no commit in this many days as archived")
    ap.add_argument("--json", action="store_true", help="Print the index as JSON instead of a summary")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = ap.parse_args()
    setup_logging(args.verbose)

    config = IndexerConfig(
        projects_dir=args.projects_dir.expanduser().resolve(),
        index_file=args.output,
        enable_ollama=args.ollama,
        min_depth=args.min_depth,
        max_depth=args.max_depth,
        excluded_names=parse_exclusions(args.exclude),
        category_level=args.category_level,
        default_tags=tuple(args.default_tags.split(",")),
        model=get_model_name(args.model),
        ollama_host=args.ollama_host,
        workers=args.workers,
        archive_after_days=args.archive_after_days,
        pull_model=args.pull_model,
    )

    if not args.json:
        print(f"Projects directory: {config.projects_dir}")
        print(f"Index file: {config.index_file}")
        print(f"Depth: {config.min_depth}..{config.max_depth}")
        print(f"Ollama: {'enabled (' + config.model + ')' if config.enable_ollama else 'disabled'}")
        if config.enable_ollama and config.pull_model:
            print(f"Note: {config.model} will be downloaded if Ollama does not have it yet")
        print()

    def on_project(name: str) -> None:
        if not args.json:
            print(f"Scanning project: {name}")

    result = run_indexing(config, progress=on_project)

    if result.error:
        if args.json:
            print(json.dumps({"error": result.error, "index_file": str(result.index_file)}, indent=2))
        else:
            print(f"Error: {result.error}")
        raise SystemExit(1)

    if args.json:
        print(json.dumps([p.to_dict() for p in result.projects], indent=2))
        return

    if result.ollama_available is False:
        print("Warning: Ollama service is not available - tags were not generated")
    print()
    print("=== PROJECTS ===")
    for project in result.projects:
        print(format_project(project))
    print()
    print(f"Successfully indexed {len(result.projects)} projects into {result.index_file}")
    print()
    print(format_stats(compute_stats(result.projects)))


if __name__ == "__main__":
    main()
