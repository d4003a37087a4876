#!/usr/bin/env python3
"""
One-command entry point: index a projects directory with Ollama tags.
Usage:
  python scripts/run_indexer.py                   # ~/projects -> projects_index.json
  python scripts/run_indexer.py /path/to/projects # index that directory
Requires: git on PATH; Ollama running (ollama serve) for tags, otherwise projects get no tags.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def main():
    from src.indexer.config import DEFAULT_INDEX_FILE, DEFAULT_PROJECTS_DIR, IndexerConfig
    from src.indexer.log_setup import setup_logging
    from src.orchestration import run_indexing

    setup_logging()
    projects_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(DEFAULT_PROJECTS_DIR)
    config = IndexerConfig(
        projects_dir=projects_dir,
        index_file=Path(DEFAULT_INDEX_FILE),
        enable_ollama=True,
    )

    print(f"Indexing {config.projects_dir} → {config.index_file}")
    result = run_indexing(config, progress=lambda name: print(f"  {name}"))
    if result.error:
        print(f"Error: {result.error}")
        return 1
    if result.ollama_available is False:
        print("Ollama not available: projects were indexed without tags")
    print(f"\nIndexed {len(result.projects)} projects")
    return 0


if __name__ == "__main__":
    sys.exit(main())
