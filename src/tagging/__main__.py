"""
CLI: generate tags for one project directory with Ollama.
  python -m src.tagging --project-dir /path/to/project [--output tags.json] [--model gemma3:1b]
"""

import argparse
import json
from pathlib import Path

from src.indexer.errors import EnrichmentError
from src.indexer.log_setup import setup_logging

from .tag_generator import OllamaTagSource, check_availability


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate tags for a specific project using Ollama")
    ap.add_argument("--project-dir", "-p", required=True, type=Path, help="Project directory")
    ap.add_argument("--output", "-o", help="Optional file to save the generated tags (JSON)")
    ap.add_argument("--model", "-m", help="Ollama model (default: $PROJECTS_INDEXER_MODEL or gemma3:1b)")
    ap.add_argument("--ollama-host", help="Ollama host (default: $OLLAMA_HOST or localhost:11434)")
    ap.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = ap.parse_args()
    setup_logging(args.verbose)

    project_dir = args.project_dir.expanduser().resolve()
    if not project_dir.is_dir():
        print(f"Error: not a directory: {project_dir}")
        raise SystemExit(1)

    source = OllamaTagSource(model=args.model, host=args.ollama_host, timeout=args.timeout)
    if not check_availability(source.client):
        print("Ollama service is not available. Start it with: ollama serve")
        raise SystemExit(1)

    try:
        tags = source.enrich(project_dir.name, str(project_dir))
    except EnrichmentError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print(f"Project: {project_dir.name}")
    print(f"Tags: {', '.join(tags) if tags else '(none)'}")

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w") as f:
            json.dump({"name": project_dir.name, "path": str(project_dir), "tags": tags}, f, indent=2)
        print(f"Wrote tags to {out_path}")


if __name__ == "__main__":
    main()
