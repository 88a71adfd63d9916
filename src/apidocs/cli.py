"""API docs generator.

Usage:
    apidocs [ROOT] [OUTPUT]

Reads the configured files under ROOT (default: current directory) and
writes the docs data to OUTPUT (default: ROOT/docs/source/api.json).
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from .config import DocsConfig
from .errors import ApiDocsError
from .packaging import build_api_docs

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Generate API docs data."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = sys.argv[1:] if argv is None else argv
    root = Path(args[0]) if args else Path.cwd()
    output = Path(args[1]) if len(args) > 1 else root / "docs" / "source" / "api.json"

    config = DocsConfig(root=root)

    print("Extracting API docs...")
    try:
        docs = build_api_docs(config)
    except ApiDocsError as e:
        log.error("%s", e)
        return 1

    for record in docs.docs:
        hidden = " (hidden from nav)" if record.hide_from_nav else ""
        print(f"  ✓ {record.name}: {len(record.props)} documented symbols{hidden}")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(docs.to_dict(), indent=2) + "\n")
    print(f"\nGenerated:\n  {output}")
    print("\nDone!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
