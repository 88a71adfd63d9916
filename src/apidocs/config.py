"""Build configuration for the API docs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Order here is the order of pages in the generated docs.
FILES = [
    "lib/index.js",
    "lib/schema.js",
    "lib/connection.js",
    "lib/document.js",
    "lib/model.js",
    "lib/query.js",
    "lib/cursor/QueryCursor.js",
    "lib/aggregate.js",
    "lib/cursor/AggregationCursor.js",
    "lib/schematype.js",
    "lib/virtualtype.js",
    "lib/error/index.js",
    "lib/schema/array.js",
    "lib/schema/documentarray.js",
    "lib/schema/SubdocumentPath.js",
    "lib/options/SchemaTypeOptions.js",
    "lib/options/SchemaArrayOptions.js",
    "lib/options/SchemaBufferOptions.js",
    "lib/options/SchemaDateOptions.js",
    "lib/options/SchemaNumberOptions.js",
    "lib/options/SchemaObjectIdOptions.js",
    "lib/options/SchemaStringOptions.js",
    "lib/types/DocumentArray/methods/index.js",
    "lib/types/subdocument.js",
    "lib/types/ArraySubdocument.js",
]

GITHUB_URL = "https://github.com/Automattic/mongoose/blob/"
EDIT_LINK_BASE = GITHUB_URL + "master/"

# Option classes get pages but stay out of the navigation.
OPTIONS_PREFIX = "lib/options"

TITLE = "API docs"


@dataclass
class DocsConfig:
    """Inputs for one docs build."""

    root: Path = field(default_factory=Path.cwd)
    files: list[str] = field(default_factory=lambda: list(FILES))
    github: str = GITHUB_URL
    edit_link_base: str = EDIT_LINK_BASE
    options_prefix: str = OPTIONS_PREFIX
    title: str = TITLE
