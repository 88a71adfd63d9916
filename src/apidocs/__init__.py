"""apidocs - API reference data from JavaScript doc comments."""

from apidocs.comments import parse_comments
from apidocs.config import DocsConfig
from apidocs.errors import ApiDocsError, CommentParseError, SourceLoadError
from apidocs.models import (
    ApiDocs,
    CommentBlock,
    Context,
    FileRecord,
    ParamDoc,
    ReturnDoc,
    Tag,
)
from apidocs.names import resolve_name
from apidocs.packaging import build_api_docs

__all__ = [
    "ApiDocs",
    "ApiDocsError",
    "CommentBlock",
    "CommentParseError",
    "Context",
    "DocsConfig",
    "FileRecord",
    "ParamDoc",
    "ReturnDoc",
    "SourceLoadError",
    "Tag",
    "build_api_docs",
    "parse_comments",
    "resolve_name",
]
