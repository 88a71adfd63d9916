"""Assemble per-file records and the final API docs structure."""

from __future__ import annotations

import logging

from .config import DocsConfig
from .loader import load_sources
from .models import ApiDocs, Context, FileRecord, SourceFile
from .names import resolve_name
from .normalize import normalize_blocks

log = logging.getLogger(__name__)


def sort_props(props: list[Context]) -> list[Context]:
    """Order by identifier string.

    Plain code point comparison. The sort is stable, so entries with the
    same string keep the order they appear in the source.
    """
    return sorted(props, key=lambda ctx: ctx.string or "")


def build_file_record(source: SourceFile, config: DocsConfig) -> FileRecord:
    """Normalize, sort and annotate the comments of one file."""
    return FileRecord(
        name=resolve_name(source.path),
        file=source.path,
        edit_link=config.edit_link_base + source.path,
        props=sort_props(normalize_blocks(source.blocks)),
        hide_from_nav=source.path.startswith(config.options_prefix),
    )


def build_api_docs(config: DocsConfig | None = None) -> ApiDocs:
    """Run the whole pipeline for config.files under config.root.

    All files are parsed before any record is built, so a broken file
    produces no output at all.

    Raises:
        SourceLoadError: If any configured file fails to load.
    """
    config = config or DocsConfig()
    sources = load_sources(config.files, config.root)

    docs = ApiDocs(github=config.github, title=config.title)
    for source in sources:
        record = build_file_record(source, config)
        log.debug("%s: %d documented symbols", record.file, len(record.props))
        docs.docs.append(record)
    return docs
