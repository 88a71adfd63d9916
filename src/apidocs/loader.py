"""Read configured source files and extract their comment blocks."""

from __future__ import annotations

import logging
from pathlib import Path

from .comments import parse_comments
from .errors import SourceLoadError
from .models import SourceFile

log = logging.getLogger(__name__)


def load_source(path: str, root: Path) -> SourceFile:
    """Parse one file, relative to root.

    Raises:
        SourceLoadError: If the file cannot be read or its comments
            cannot be parsed. The original error is chained.
    """
    try:
        text = (root / path).read_text(encoding="utf-8")
        blocks = parse_comments(text, raw=True)
    except Exception as e:
        # Name the file; the parser error alone rarely says which one
        log.error("Error while trying to parse comments for %s", path)
        raise SourceLoadError(
            path, f"Failed to load {path}: {e.__class__.__name__}: {e}"
        ) from e
    return SourceFile(path=path, blocks=blocks)


def load_sources(paths: list[str], root: Path) -> list[SourceFile]:
    """Parse every path in order. Stops at the first failure."""
    return [load_source(path, root) for path in paths]
